from __future__ import annotations

import os
from pathlib import Path

APP_NAME = "pocket-notes"
APP_HOME = Path(os.environ.get("POCKET_NOTES_HOME") or Path.home() / f".{APP_NAME}")
LOG_DIR = APP_HOME / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
# Any non-empty value turns on DEBUG logging.
LOG_VERBOSE = bool(os.environ.get("POCKET_NOTES_DEBUG"))
DATA_DIR = APP_HOME / "data"

# Single key holding the whole note collection snapshot.
STORAGE_KEY = "notes-storage"

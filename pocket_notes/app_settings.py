from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QSettings

from pocket_notes.settings import DATA_DIR


@dataclass(frozen=True)
class SettingsKeys:
    UI_GEOMETRY: str = "ui/geometry"
    DATA_DIR: str = "storage/data_dir"
    STORAGE_KEY: str = "storage/key"


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def data_dir_from(settings: QSettings) -> Path:
    """Storage directory: QSettings override, else the app home default."""
    raw = get_str(settings, SettingsKeys.DATA_DIR, "").strip()
    return Path(raw).expanduser() if raw else DATA_DIR

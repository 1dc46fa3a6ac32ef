# pocket_notes/storage/filesystem.py

from __future__ import annotations

import os
import re
import unicodedata
import uuid
from pathlib import Path

INVALID_CHARS_RE = re.compile(r'[<>:"/\\|?*\s]')

MAX_KEY_LENGTH = 120


def safe_key(key: str) -> str:
    """
    Map a storage key onto a cross-platform file stem.

    Deterministic: the same key always lands in the same file.
    """
    if key is None:
        raise ValueError("safe_key(): key is None")

    name = unicodedata.normalize("NFKC", str(key))
    name = "".join(ch for ch in name if unicodedata.category(ch)[0] != "C")
    name = INVALID_CHARS_RE.sub("_", name.strip()).strip(".")

    if not name:
        raise ValueError(f"safe_key(): unusable key {key!r}")

    return name[:MAX_KEY_LENGTH]


def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Replace ``path`` with ``text`` in one step.

    The text lands in a hidden sibling file, is synced to disk, then renamed
    over the target, so a crash mid-save leaves the previous snapshot intact.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        tmp_path.replace(path)

    finally:
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass

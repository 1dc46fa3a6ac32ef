# pocket_notes/storage/kv.py

from __future__ import annotations

import threading
from pathlib import Path
from typing import Protocol

from pocket_notes.core.errors import StorageReadError, StorageWriteError
from pocket_notes.storage.filesystem import atomic_write_text, safe_key


class KeyValueStorage(Protocol):
    """
    Device-local string store.

    Calls block; NoteStore only ever invokes them from worker threads.
    Implementations raise StorageReadError / StorageWriteError on I/O failure.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStorage:
    """Dict-backed storage. Survives nothing, but is thread-safe."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class FileKeyValueStorage:
    """
    One UTF-8 file per key:
      <root_dir>/<safe key>.json
    """

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)

    def path_for(self, key: str) -> Path:
        return self.root_dir / f"{safe_key(key)}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageReadError(key, f"failed to read {path}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            atomic_write_text(path, value, encoding="utf-8")
        except OSError as exc:
            raise StorageWriteError(key, f"failed to write {path}: {exc}") from exc

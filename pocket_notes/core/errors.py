from __future__ import annotations


class PocketNotesError(Exception):
    """Base class for all pocket-notes errors."""


class StorageError(PocketNotesError):
    def __init__(self, key: str, message: str):
        super().__init__(f"{message} (key={key!r})")
        self.key = key


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass


class SnapshotDecodeError(PocketNotesError):
    """Persisted snapshot could not be turned back into notes."""

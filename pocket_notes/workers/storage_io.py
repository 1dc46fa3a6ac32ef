# pocket_notes/workers/storage_io.py

from __future__ import annotations

from PySide6.QtCore import QObject, QRunnable, Signal

from pocket_notes.core.snapshot import decode_snapshot
from pocket_notes.storage.kv import KeyValueStorage


class SnapshotReadSignals(QObject):
    """
    finished(req_id, notes)  notes is list[Note], or None when nothing is stored
    failed(req_id, error_message)
    """
    finished = Signal(int, object)
    failed = Signal(int, str)


class SnapshotReadWorker(QRunnable):
    """
    Background worker that loads and decodes the persisted snapshot.

    IMPORTANT:
    - No UI code
    - Never mutates store state, only reports back through signals
    """

    def __init__(self, *, req_id: int, storage: KeyValueStorage, key: str):
        super().__init__()
        self.req_id = req_id
        self.storage = storage
        self.key = key

        self.signals = SnapshotReadSignals()

    def run(self) -> None:
        try:
            text = self.storage.get(self.key)
            notes = None if text is None else decode_snapshot(text)
            self.signals.finished.emit(self.req_id, notes)
        except Exception as exc:
            self.signals.failed.emit(self.req_id, f"{type(exc).__name__}: {exc}")


class SnapshotWriteSignals(QObject):
    finished = Signal(int)       # req_id
    failed = Signal(int, str)    # req_id, error


class SnapshotWriteWorker(QRunnable):
    """
    Writes one already-encoded snapshot.

    The payload is encoded on the owner thread, so the worker never
    touches the live collection.
    """

    def __init__(self, *, req_id: int, storage: KeyValueStorage, key: str, payload: str):
        super().__init__()
        self.req_id = req_id
        self.storage = storage
        self.key = key
        self.payload = payload

        self.signals = SnapshotWriteSignals()

    def run(self) -> None:
        try:
            self.storage.set(self.key, self.payload)
            self.signals.finished.emit(self.req_id)
        except Exception as exc:
            self.signals.failed.emit(self.req_id, f"{type(exc).__name__}: {exc}")

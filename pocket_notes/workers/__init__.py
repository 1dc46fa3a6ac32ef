from .storage_io import SnapshotReadWorker, SnapshotWriteWorker

__all__ = [
    "SnapshotReadWorker",
    "SnapshotWriteWorker",
]

from .errors import (
    PocketNotesError,
    SnapshotDecodeError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from .models import UNTITLED, Note, generate_note_id, make_note, now_ms
from .snapshot import decode_snapshot, encode_snapshot

__all__ = ["Note",
           "UNTITLED",
           "make_note",
           "generate_note_id",
           "now_ms",
           "encode_snapshot",
           "decode_snapshot",
           "PocketNotesError",
           "StorageError",
           "StorageReadError",
           "StorageWriteError",
           "SnapshotDecodeError",
           ]

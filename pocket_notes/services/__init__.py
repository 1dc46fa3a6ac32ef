from .note_store import NoteStore, StoreState

__all__ = ["NoteStore", "StoreState"]

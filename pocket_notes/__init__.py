from .core.models import UNTITLED, Note
from .services.note_store import NoteStore, StoreState
from .storage.kv import FileKeyValueStorage, KeyValueStorage, MemoryKeyValueStorage

__all__ = ['Note',
           'UNTITLED',
           'NoteStore',
           'StoreState',
           'KeyValueStorage',
           'FileKeyValueStorage',
           'MemoryKeyValueStorage',
           ]

from .filesystem import atomic_write_text, safe_key
from .kv import FileKeyValueStorage, KeyValueStorage, MemoryKeyValueStorage

__all__ = ["KeyValueStorage",
           "FileKeyValueStorage",
           "MemoryKeyValueStorage",
           "atomic_write_text",
           "safe_key",
           ]

import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from pocket_notes.core.errors import StorageReadError, StorageWriteError
from pocket_notes.storage.filesystem import atomic_write_text, safe_key
from pocket_notes.storage.kv import FileKeyValueStorage, MemoryKeyValueStorage


def test_memory_storage_missing_key():
    storage = MemoryKeyValueStorage()
    assert storage.get("notes-storage") is None
    storage.set("notes-storage", "{}")
    assert storage.get("notes-storage") == "{}"


def test_file_storage_survives_new_instance(tmp_path):
    FileKeyValueStorage(tmp_path).set("notes-storage", '{"notes": []}')
    assert FileKeyValueStorage(tmp_path).get("notes-storage") == '{"notes": []}'


def test_file_storage_missing_key(tmp_path):
    assert FileKeyValueStorage(tmp_path / "nowhere").get("notes-storage") is None


def test_file_storage_creates_directory_and_keeps_utf8(tmp_path):
    storage = FileKeyValueStorage(tmp_path / "data")
    storage.set("notes-storage", "привет")
    assert storage.path_for("notes-storage").read_text(encoding="utf-8") == "привет"


def test_file_storage_overwrite_leaves_no_temp_files(tmp_path):
    storage = FileKeyValueStorage(tmp_path)
    storage.set("k", "one")
    storage.set("k", "two")
    assert storage.get("k") == "two"
    assert [p.name for p in tmp_path.iterdir()] == ["k.json"]


def test_file_storage_read_error(tmp_path):
    storage = FileKeyValueStorage(tmp_path)
    storage.path_for("k").mkdir()
    with pytest.raises(StorageReadError):
        storage.get("k")


def test_file_storage_write_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    storage = FileKeyValueStorage(blocker / "sub")
    with pytest.raises(StorageWriteError):
        storage.set("k", "v")


def test_safe_key():
    assert safe_key("notes-storage") == "notes-storage"
    assert safe_key("a/b c") == "a_b_c"
    with pytest.raises(ValueError):
        safe_key("  ")


def test_atomic_write_replaces(tmp_path):
    path = tmp_path / "x.json"
    atomic_write_text(path, "old")
    atomic_write_text(path, "new")
    assert path.read_text(encoding="utf-8") == "new"

import sys
import os
import json

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from pocket_notes.core.errors import SnapshotDecodeError
from pocket_notes.core.models import Note
from pocket_notes.core.snapshot import decode_snapshot, encode_snapshot

NOTES = [
    Note(id="2-b", title="Второй", content="", created_at=2),
    Note(id="1-a", title="First", content="line1\nline2", created_at=1),
]


def test_round_trip_preserves_order():
    assert decode_snapshot(encode_snapshot(NOTES)) == NOTES


def test_wire_format():
    data = json.loads(encode_snapshot(NOTES[1:]))
    assert data == {
        "notes": [{"id": "1-a", "title": "First", "content": "line1\nline2", "createdAt": 1}]
    }


def test_empty_collection():
    assert decode_snapshot(encode_snapshot([])) == []


def test_persist_envelope_is_accepted():
    text = json.dumps({
        "state": {"notes": [{"id": "x", "title": "T", "content": "C", "createdAt": 5}]},
        "version": 0,
    })
    assert decode_snapshot(text) == [Note(id="x", title="T", content="C", created_at=5)]


def test_integral_float_timestamp():
    text = '{"notes": [{"id": "x", "title": "T", "content": "", "createdAt": 1729300000000.0}]}'
    assert decode_snapshot(text)[0].created_at == 1729300000000


def test_duplicate_ids_keep_first():
    text = json.dumps({"notes": [
        {"id": "x", "title": "new", "content": "", "createdAt": 2},
        {"id": "x", "title": "old", "content": "", "createdAt": 1},
    ]})
    assert [n.title for n in decode_snapshot(text)] == ["new"]


@pytest.mark.parametrize("text", [
    "",
    "not json",
    "[]",
    '{"notes": {}}',
    '{"other": []}',
    '{"notes": [1]}',
    '{"notes": [{"id": "x", "title": "T", "content": "C"}]}',
    '{"notes": [{"id": "x", "title": 3, "content": "C", "createdAt": 1}]}',
    '{"notes": [{"id": "", "title": "T", "content": "C", "createdAt": 1}]}',
    '{"notes": [{"id": "x", "title": "T", "content": "C", "createdAt": true}]}',
    '{"notes": [{"id": "x", "title": "T", "content": "C", "createdAt": 1.5}]}',
])
def test_corrupt_snapshots_raise(text):
    with pytest.raises(SnapshotDecodeError):
        decode_snapshot(text)

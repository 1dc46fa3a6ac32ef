import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pocket_notes.core.models import UNTITLED, generate_note_id, make_note


def test_make_note_trims_fields():
    note = make_note("  Groceries ", "  Milk, eggs\n", ts_ms=1000)
    assert note.title == "Groceries"
    assert note.content == "Milk, eggs"
    assert note.created_at == 1000


def test_blank_title_becomes_untitled():
    note = make_note("   ", "Reminder")
    assert note.title == UNTITLED
    assert note.content == "Reminder"


def test_title_only_note_has_empty_content():
    note = make_note("Call mom", "")
    assert note.title == "Call mom"
    assert note.content == ""


def test_both_blank_is_ignored():
    assert make_note("", "") is None
    assert make_note("  \t", "\n ") is None


def test_id_carries_timestamp():
    note = make_note("a", "b", ts_ms=1729300000000)
    assert note.id.startswith("1729300000000-")


def test_ids_unique_within_same_millisecond():
    ids = {generate_note_id(1729300000000) for _ in range(2000)}
    assert len(ids) == 2000

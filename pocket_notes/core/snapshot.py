from __future__ import annotations

import json
from typing import Any, Iterable

from pocket_notes.core.errors import SnapshotDecodeError
from pocket_notes.core.models import Note


def note_to_dict(note: Note) -> dict[str, Any]:
    return {
        "id": note.id,
        "title": note.title,
        "content": note.content,
        "createdAt": note.created_at,
    }


def note_from_dict(item: Any, *, index: int = 0) -> Note:
    if not isinstance(item, dict):
        raise SnapshotDecodeError(f"notes[{index}]: expected object, got {type(item).__name__}")

    for field in ("id", "title", "content"):
        if not isinstance(item.get(field), str):
            raise SnapshotDecodeError(f"notes[{index}].{field}: expected string")
    if not item["id"]:
        raise SnapshotDecodeError(f"notes[{index}].id: empty")

    created_at = item.get("createdAt")
    # bool is an int subclass; JS numbers may come back as 1.7e12 floats
    if isinstance(created_at, bool):
        raise SnapshotDecodeError(f"notes[{index}].createdAt: expected number")
    if isinstance(created_at, float) and created_at.is_integer():
        created_at = int(created_at)
    if not isinstance(created_at, int):
        raise SnapshotDecodeError(f"notes[{index}].createdAt: expected integer number")

    return Note(
        id=item["id"],
        title=item["title"],
        content=item["content"],
        created_at=created_at,
    )


def encode_snapshot(notes: Iterable[Note]) -> str:
    """Serialize the collection as {"notes": [...]}, newest first."""
    return json.dumps(
        {"notes": [note_to_dict(n) for n in notes]},
        ensure_ascii=False,
    )


def decode_snapshot(text: str) -> list[Note]:
    """
    Parse a persisted snapshot.

    Accepts both the plain {"notes": [...]} document and the
    {"state": {"notes": [...]}, "version": N} envelope written by the
    mobile build. Any structural problem raises SnapshotDecodeError.
    Duplicate ids keep their first occurrence.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise SnapshotDecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise SnapshotDecodeError("snapshot root must be an object")

    if "notes" not in data and isinstance(data.get("state"), dict):
        data = data["state"]

    raw = data.get("notes")
    if not isinstance(raw, list):
        raise SnapshotDecodeError("snapshot has no 'notes' list")

    notes: list[Note] = []
    seen: set[str] = set()
    for i, item in enumerate(raw):
        note = note_from_dict(item, index=i)
        if note.id in seen:
            continue
        seen.add(note.id)
        notes.append(note)
    return notes

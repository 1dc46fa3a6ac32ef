from __future__ import annotations

import secrets
import time
from dataclasses import dataclass

UNTITLED = "Untitled"


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    content: str
    created_at: int  # ms since epoch


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def generate_note_id(ts_ms: int | None = None) -> str:
    """
    Millisecond timestamp + 48 random bits, e.g. "1729300000000-3f9a0c1b2d4e".

    Notes created within the same millisecond differ only by the suffix.
    """
    ts = now_ms() if ts_ms is None else int(ts_ms)
    return f"{ts}-{secrets.token_hex(6)}"


def make_note(title: str, content: str, *, ts_ms: int | None = None) -> Note | None:
    """
    Build a new note from raw user input.

    Returns None when both fields are blank: empty submissions are ignored,
    not rejected.
    """
    title = (title or "").strip()
    content = (content or "").strip()
    if not title and not content:
        return None

    ts = now_ms() if ts_ms is None else int(ts_ms)
    return Note(
        id=generate_note_id(ts),
        title=title or UNTITLED,
        content=content,
        created_at=ts,
    )

# pocket_notes/services/note_store.py

from __future__ import annotations

import dataclasses
import enum
import time
from typing import Callable

from PySide6.QtCore import QCoreApplication, QEventLoop, QObject, QThreadPool, Signal, Slot

from pocket_notes.core.models import Note, generate_note_id, make_note
from pocket_notes.core.snapshot import encode_snapshot
from pocket_notes.logging_setup import get_logger
from pocket_notes.settings import STORAGE_KEY
from pocket_notes.storage.kv import KeyValueStorage
from pocket_notes.workers.storage_io import SnapshotReadWorker, SnapshotWriteWorker

log = get_logger(__name__)


class StoreState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    HYDRATING = "hydrating"
    READY = "ready"


NotesCallback = Callable[[tuple[Note, ...]], None]


class NoteStore(QObject):
    """
    Owns the note collection (newest first) and keeps storage in sync.

    Responsibilities:
    - rehydrate once from storage (Uninitialized -> Hydrating -> Ready)
    - queue mutations issued while hydrating, replay them afterwards
    - notify subscribers synchronously on every accepted mutation
    - persist the full snapshot after each mutation, one write in flight

    Storage failures never reach the caller: a bad snapshot means an empty
    collection, a failed write is logged and the in-memory state stays
    authoritative.
    """

    notes_changed = Signal(object)   # tuple[Note, ...]
    state_changed = Signal(object)   # StoreState
    ready = Signal()

    def __init__(
        self,
        *,
        storage: KeyValueStorage,
        key: str = STORAGE_KEY,
        thread_pool: QThreadPool | None = None,
        autostart: bool = True,
        parent: QObject | None = None,
    ):
        super().__init__(parent)

        self._storage = storage
        self._key = key
        self._pool = thread_pool or QThreadPool.globalInstance()

        self._state = StoreState.UNINITIALIZED
        self._notes: list[Note] = []
        self._subscribers: list[NotesCallback] = []

        # ("create", Note) | ("delete", note_id), in call order
        self._pending_ops: list[tuple[str, object]] = []

        self._req_id = 0
        self._read_worker: SnapshotReadWorker | None = None
        self._write_worker: SnapshotWriteWorker | None = None
        self._dirty = False

        if autostart:
            self.start()

    # ───────────────────────── public API ─────────────────────────

    @property
    def state(self) -> StoreState:
        return self._state

    def is_ready(self) -> bool:
        return self._state is StoreState.READY

    def notes(self) -> tuple[Note, ...]:
        """Current collection, newest first. Empty until hydrated."""
        if self._state is not StoreState.READY:
            return ()
        return tuple(self._notes)

    def subscribe(self, callback: NotesCallback) -> Callable[[], None]:
        """
        Register a plain callable for change notifications.

        Returns an unsubscribe function. Qt consumers can connect to
        notes_changed instead.
        """
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return _unsubscribe

    def create_note(self, title: str, content: str) -> None:
        note = make_note(title, content)
        if note is None:
            log.debug("create_note ignored: empty title and content")
            return

        if self._state is not StoreState.READY:
            self._pending_ops.append(("create", note))
            log.debug("create_note queued until hydrated: id=%s", note.id)
            return

        self._apply_create(note)
        self._schedule_write()

    def delete_note(self, note_id: str) -> None:
        if self._state is not StoreState.READY:
            self._pending_ops.append(("delete", note_id))
            log.debug("delete_note queued until hydrated: id=%s", note_id)
            return

        if self._apply_delete(note_id):
            self._schedule_write()

    def start(self) -> None:
        """Begin hydration. Called from __init__ unless autostart=False."""
        if self._state is not StoreState.UNINITIALIZED:
            return

        self._set_state(StoreState.HYDRATING)

        self._req_id += 1
        worker = SnapshotReadWorker(req_id=self._req_id, storage=self._storage, key=self._key)
        worker.signals.finished.connect(self._handle_read_finished)
        worker.signals.failed.connect(self._handle_read_failed)

        self._read_worker = worker
        self._pool.start(worker)

    def pending_mutations(self) -> int:
        return len(self._pending_ops)

    def is_idle(self) -> bool:
        """No hydration running, no write in flight, nothing left unwritten."""
        return (
            self._state is not StoreState.HYDRATING
            and self._write_worker is None
            and not self._dirty
        )

    def flush(self, timeout_ms: int = 5000) -> bool:
        """
        Pump the event loop until every scheduled write has completed.

        Used at shutdown so the last in-memory state reaches storage.
        Returns False on timeout.
        """
        deadline = time.monotonic() + timeout_ms / 1000.0
        while not self.is_idle():
            if time.monotonic() >= deadline:
                log.warning("Flush timed out after %s ms (state=%s)", timeout_ms, self._state.value)
                return False
            QCoreApplication.processEvents(QEventLoop.ProcessEventsFlag.AllEvents, 20)
            time.sleep(0.005)
        return True

    # ───────────────────────── mutations ─────────────────────────

    def _apply_create(self, note: Note) -> None:
        existing = {n.id for n in self._notes}
        while note.id in existing:
            note = dataclasses.replace(note, id=generate_note_id(note.created_at))

        self._notes.insert(0, note)
        log.info("Note created: id=%s title=%r", note.id, note.title)
        self._notify()

    def _apply_delete(self, note_id: str) -> bool:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                del self._notes[i]
                log.info("Note deleted: id=%s", note_id)
                self._notify()
                return True

        log.debug("delete_note ignored: unknown id=%s", note_id)
        return False

    def _notify(self) -> None:
        snapshot = tuple(self._notes)
        self.notes_changed.emit(snapshot)
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                log.exception("Notes subscriber failed: %r", callback)

    def _set_state(self, state: StoreState) -> None:
        log.debug("NoteStore state: %s -> %s", self._state.value, state.value)
        self._state = state
        self.state_changed.emit(state)

    # ───────────────────────── hydration ─────────────────────────

    def _is_current_read(self, req_id: int) -> bool:
        worker = self._read_worker
        if worker is None or worker.req_id != req_id:
            log.debug("Dropping stale snapshot read (req=%s)", req_id)
            return False
        self._read_worker = None
        return True

    @Slot(int, object)
    def _handle_read_finished(self, req_id: int, notes) -> None:
        if not self._is_current_read(req_id):
            return
        if notes is None:
            log.info("No stored snapshot under %r, starting empty", self._key)
            notes = []
        else:
            log.info("Rehydrated %d note(s) from %r", len(notes), self._key)
        self._finish_hydration(list(notes))

    @Slot(int, str)
    def _handle_read_failed(self, req_id: int, error: str) -> None:
        if not self._is_current_read(req_id):
            return
        log.warning("Snapshot unreadable, starting empty: %s", error)
        self._finish_hydration([])

    def _finish_hydration(self, notes: list[Note]) -> None:
        self._notes = notes
        self._set_state(StoreState.READY)
        self._notify()

        pending, self._pending_ops = self._pending_ops, []
        changed = False
        for op, arg in pending:
            if op == "create":
                self._apply_create(arg)
                changed = True
            else:
                changed = self._apply_delete(arg) or changed

        if pending:
            log.info("Replayed %d queued mutation(s)", len(pending))
        if changed:
            self._schedule_write()

        self.ready.emit()

    # ───────────────────────── persistence ─────────────────────────

    def _schedule_write(self) -> None:
        self._dirty = True
        if self._write_worker is not None:
            # in flight; the completion handler picks up the newer state
            return
        self._start_write()

    def _start_write(self) -> None:
        self._dirty = False
        self._req_id += 1

        worker = SnapshotWriteWorker(
            req_id=self._req_id,
            storage=self._storage,
            key=self._key,
            payload=encode_snapshot(self._notes),
        )
        worker.signals.finished.connect(self._handle_write_finished)
        worker.signals.failed.connect(self._handle_write_failed)

        self._write_worker = worker
        self._pool.start(worker)

    @Slot(int)
    def _handle_write_finished(self, req_id: int) -> None:
        log.debug("Snapshot written (req=%s)", req_id)
        self._write_done()

    @Slot(int, str)
    def _handle_write_failed(self, req_id: int, error: str) -> None:
        log.error("Snapshot write failed (req=%s): %s", req_id, error)
        self._write_done()

    def _write_done(self) -> None:
        self._write_worker = None
        if self._dirty:
            self._start_write()

import os
import sys
import tempfile
import threading
import time

os.environ.setdefault("POCKET_NOTES_HOME", tempfile.mkdtemp(prefix="pocket-notes-tests-"))
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop, QThreadPool

from pocket_notes.core.errors import StorageWriteError
from pocket_notes.storage.kv import MemoryKeyValueStorage


def wait_until(predicate, timeout=5.0):
    """Pump Qt events until predicate() holds; queued signals need this."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() >= deadline:
            raise AssertionError("condition not met before timeout")
        QCoreApplication.processEvents(QEventLoop.ProcessEventsFlag.AllEvents, 20)
        time.sleep(0.002)


class RecordingStorage(MemoryKeyValueStorage):
    """
    Memory storage that records every write and can hold reads/writes
    until a gate is opened.
    """

    def __init__(self, initial=None, *, hold_reads=False, hold_writes=False, fail_writes=0):
        super().__init__(initial)
        self.writes = []
        self.read_gate = threading.Event()
        self.write_gate = threading.Event()
        self.write_entered = threading.Event()
        if not hold_reads:
            self.read_gate.set()
        if not hold_writes:
            self.write_gate.set()
        self.fail_writes = fail_writes

    def get(self, key):
        self.read_gate.wait(5)
        return super().get(key)

    def set(self, key, value):
        self.write_entered.set()
        self.write_gate.wait(5)
        if self.fail_writes > 0:
            self.fail_writes -= 1
            raise StorageWriteError(key, "disk full")
        self.writes.append(value)
        super().set(key, value)


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def pool(qapp):
    pool = QThreadPool()
    yield pool
    pool.waitForDone(5000)

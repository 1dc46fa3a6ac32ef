from __future__ import annotations

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from pocket_notes.app_settings import SettingsKeys, data_dir_from, get_str
from pocket_notes.logging_setup import SESSION_ID, get_logger, install_global_exception_hooks, setup_logging
from pocket_notes.services.note_store import NoteStore
from pocket_notes.settings import APP_NAME, LOG_VERBOSE, STORAGE_KEY
from pocket_notes.storage.kv import FileKeyValueStorage
from pocket_notes.ui.main_window import NotesWindow

log = get_logger(__name__)


def main() -> int:
    setup_logging(verbose=LOG_VERBOSE)
    install_global_exception_hooks()
    app = QApplication([])
    app.setApplicationName(APP_NAME)

    settings = QSettings(APP_NAME, APP_NAME)
    data_dir = data_dir_from(settings)
    key = get_str(settings, SettingsKeys.STORAGE_KEY, STORAGE_KEY)

    storage = FileKeyValueStorage(data_dir)
    store = NoteStore(storage=storage, key=key)
    app.aboutToQuit.connect(store.flush)

    win = NotesWindow(store, settings=settings)
    win.show()
    log.info("Application started, data_dir=%s, SID=%s", data_dir, SESSION_ID)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

from PySide6.QtCore import QSettings, Qt, QTimer, Slot
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QMainWindow, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget,
)

from pocket_notes.app_settings import SettingsKeys
from pocket_notes.core.models import Note
from pocket_notes.logging_setup import get_logger
from pocket_notes.services.note_store import NoteStore, StoreState

log = get_logger(__name__)

EMPTY_TEXT = "No notes yet. Add your first note above."


class NoteCard(QWidget):
    """One row of the list: title, optional content, Delete button."""

    def __init__(self, note: Note, on_delete):
        super().__init__()
        self.note_id = note.id

        title = QLabel(note.title)
        title.setStyleSheet("font-weight: 600;")
        title.setWordWrap(True)

        delete_btn = QPushButton("Delete")
        delete_btn.setStyleSheet(
            "background-color: #ef4444; color: #fff; border-radius: 6px; padding: 4px 10px;"
        )
        delete_btn.clicked.connect(lambda: on_delete(self.note_id))

        header = QHBoxLayout()
        header.addWidget(title, 1)
        header.addWidget(delete_btn)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.addLayout(header)

        if note.content:
            body = QLabel(note.content)
            body.setWordWrap(True)
            body.setTextInteractionFlags(Qt.TextSelectableByMouse)
            layout.addWidget(body)


class NotesWindow(QMainWindow):
    def __init__(self, store: NoteStore, *, settings: QSettings | None = None):
        super().__init__()
        self.setWindowTitle("Personal Notes")

        self.store = store
        self._settings = settings

        # UI

        header = QLabel("Personal Notes")
        header.setStyleSheet("font-size: 20px; font-weight: 700;")
        subtitle = QLabel("Capture quick thoughts, reminders and ideas, stored on this device.")
        subtitle.setWordWrap(True)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Note title")
        self.content_input = QPlainTextEdit()
        self.content_input.setPlaceholderText("Write your note...")
        self.content_input.setMinimumHeight(80)

        self.save_btn = QPushButton("Save note")
        self.save_btn.setStyleSheet(
            "background-color: #2563eb; color: #fff; border-radius: 8px; padding: 10px;"
        )
        self.save_btn.clicked.connect(self.handle_add_note)
        self.title_input.returnPressed.connect(self.handle_add_note)

        self.empty_label = QLabel(EMPTY_TEXT)
        self.listw = QListWidget()

        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(16, 24, 16, 16)
        layout.addWidget(header)
        layout.addWidget(subtitle)
        layout.addWidget(self.title_input)
        layout.addWidget(self.content_input)
        layout.addWidget(self.save_btn)
        layout.addWidget(QLabel("Your notes"))
        layout.addWidget(self.empty_label)
        layout.addWidget(self.listw, 1)
        self.setCentralWidget(root)

        self._restore_geometry()

        self.store.notes_changed.connect(self.render_notes)
        self.store.state_changed.connect(self._on_state_changed)
        self.render_notes(self.store.notes())
        self._on_state_changed(self.store.state)

    # ───────────────────────── actions ─────────────────────────

    @Slot()
    def handle_add_note(self) -> None:
        title = self.title_input.text()
        content = self.content_input.toPlainText()
        if not title.strip() and not content.strip():
            return

        self.store.create_note(title, content)
        self.title_input.clear()
        self.content_input.clear()

        QTimer.singleShot(0, self.listw.scrollToTop)

    def handle_delete(self, note_id: str) -> None:
        self.store.delete_note(note_id)

    # ───────────────────────── rendering ─────────────────────────

    @Slot(object)
    def render_notes(self, notes) -> None:
        self.listw.clear()
        for note in notes:
            card = NoteCard(note, self.handle_delete)
            item = QListWidgetItem(self.listw)
            item.setData(Qt.UserRole, note.id)
            item.setSizeHint(card.sizeHint())
            self.listw.setItemWidget(item, card)

        self.empty_label.setVisible(not notes)

    @Slot(object)
    def _on_state_changed(self, state: StoreState) -> None:
        if state is StoreState.READY:
            self.statusBar().clearMessage()
        else:
            self.statusBar().showMessage("Loading notes…")

    # ───────────────────────── window state ─────────────────────────

    def _restore_geometry(self) -> None:
        geo = self._settings.value(SettingsKeys.UI_GEOMETRY) if self._settings else None
        if geo:
            self.restoreGeometry(geo)
        else:
            self.resize(520, 720)

    def closeEvent(self, event):  # type: ignore[override]
        try:
            if self._settings is not None:
                self._settings.setValue(SettingsKeys.UI_GEOMETRY, self.saveGeometry())
        except Exception:
            log.exception("Failed to save window geometry")

        if not self.store.flush():
            log.warning("Closing with unsaved notes")
        super().closeEvent(event)

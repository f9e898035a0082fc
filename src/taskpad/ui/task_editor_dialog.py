# src/taskpad/ui/task_editor_dialog.py
# Rev 0.1.0
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QButtonGroup, QDialog, QDialogButtonBox, QFormLayout, QHBoxLayout,
    QLineEdit, QPushButton, QTextEdit, QVBoxLayout, QWidget
)

from taskpad.models.types import PRIORITIES
from taskpad.services.editor_session import EditorSession
from taskpad.ui.window_mode import lock_dialog_fixed


class TaskEditorDialog(QDialog):
    """
    Form over an EditorSession: Title, Notes, Low/Medium/High, Due date.

    Widgets write straight into the session; Save is only enabled while the
    title is non-blank. The dialog accepts only when the save handler succeeds.
    """

    def __init__(self, session: EditorSession, parent: QWidget | None = None):
        super().__init__(parent)
        self._session = session
        self._save_handler = None
        self.setWindowTitle(session.dialog_title)

        # --- fields
        self._title = QLineEdit(session.title)
        self._title.setPlaceholderText("Title")
        self._title.textChanged.connect(self._on_title_changed)

        self._notes = QTextEdit()
        self._notes.setAcceptRichText(False)
        self._notes.setPlainText(session.notes)
        self._notes.textChanged.connect(self._on_notes_changed)

        prio_row = QHBoxLayout()
        self._prio_group = QButtonGroup(self)
        self._prio_group.setExclusive(True)
        for prio in PRIORITIES:
            btn = QPushButton(prio.capitalize())
            btn.setCheckable(True)
            btn.setChecked(prio == session.priority)
            btn.setProperty("priority", prio)
            self._prio_group.addButton(btn)
            prio_row.addWidget(btn)
        self._prio_group.buttonClicked.connect(lambda b: self._session.set_priority(b.property("priority")))

        self._due = QLineEdit(session.due_date_text)
        self._due.setPlaceholderText("YYYY-MM-DD")
        self._due.textEdited.connect(self._session.set_due_date_text)

        form = QFormLayout()
        form.addRow("Title:", self._title)
        form.addRow("Notes:", self._notes)
        form.addRow("Priority:", prio_row)
        form.addRow("Due date (YYYY-MM-DD):", self._due)

        self._btns = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        self._btns.accepted.connect(self._on_save)
        self._btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self._btns)

        lock_dialog_fixed(self)
        self._on_title_changed(self._title.text())
        self._title.setFocus(Qt.OtherFocusReason)

    def set_save_handler(self, handler) -> None:
        """handler() -> bool; True closes the dialog."""
        self._save_handler = handler

    def _on_title_changed(self, text: str) -> None:
        self._session.title = text
        self._btns.button(QDialogButtonBox.Save).setEnabled(bool(text.strip()))

    def _on_notes_changed(self) -> None:
        self._session.notes = self._notes.toPlainText()

    def _on_save(self) -> None:
        ok = self._save_handler() if self._save_handler else self._session.save()
        if ok:
            self.accept()

# Rev 0.1.0
# src/taskpad/ui/undo_dialog.py
from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QDialog, QDialogButtonBox, QLabel, QPushButton, QVBoxLayout, QWidget


class UndoDeleteDialog(QDialog):
    """
    Non-modal "Undo delete?" prompt.
    Closing it with Esc/the title bar only hides it; the undo buffer is kept
    until Undo or Dismiss is pressed.
    """

    undoRequested = Signal()
    dismissRequested = Signal()

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle("Undo delete?")
        self.setModal(False)

        self._message = QLabel("Task removed. You can undo this action.")
        self._message.setWordWrap(True)

        btns = QDialogButtonBox(self)
        self._btn_dismiss = QPushButton("Dismiss")
        self._btn_undo = QPushButton("Undo")
        btns.addButton(self._btn_dismiss, QDialogButtonBox.RejectRole)
        btns.addButton(self._btn_undo, QDialogButtonBox.AcceptRole)
        self._btn_dismiss.clicked.connect(self.dismissRequested)
        self._btn_undo.clicked.connect(self.undoRequested)

        root = QVBoxLayout(self)
        root.addWidget(self._message)
        root.addWidget(btns)

    def offer(self, message: str) -> None:
        self._message.setText(message)
        self.show()
        self.raise_()

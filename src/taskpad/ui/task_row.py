# Rev 0.1.0
# src/taskpad/ui/task_row.py
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QCheckBox, QHBoxLayout, QLabel, QPushButton, QToolButton, QVBoxLayout, QWidget

from taskpad.models.entities import Task
from taskpad.utils.dates import human_date

_PRIORITY_COLORS = {"low": "#48B3AF", "medium": "#E0A030", "high": "#E05A5A"}


class TaskRow(QWidget):
    """One card in the list: checkbox | title/notes/meta | edit, delete."""

    toggleRequested = Signal(str)
    priorityCycleRequested = Signal(str)
    editRequested = Signal(str)
    deleteRequested = Signal(str)

    def __init__(self, task: Task, parent: QWidget | None = None):
        super().__init__(parent)
        tid = task.id

        self._check = QCheckBox()
        self._check.setChecked(task.completed)
        self._check.clicked.connect(lambda _=False: self.toggleRequested.emit(tid))

        title = QLabel(task.title)
        title.setWordWrap(True)
        f = QFont(title.font())
        f.setPointSize(f.pointSize() + 2)
        f.setStrikeOut(task.completed)
        title.setFont(f)

        body = QVBoxLayout()
        body.setSpacing(2)
        body.addWidget(title)
        if task.notes:
            notes = QLabel(task.notes)
            notes.setWordWrap(True)
            nf = QFont(notes.font())
            nf.setStrikeOut(task.completed)
            notes.setFont(nf)
            if task.completed:
                notes.setStyleSheet("color: #7b7b7b;")
            body.addWidget(notes)
        if task.completed:
            title.setStyleSheet("color: #7b7b7b;")

        meta = QHBoxLayout()
        prio = QPushButton(task.priority.upper())
        prio.setFlat(True)
        prio.setToolTip("Click to change priority")
        prio.setStyleSheet(f"color: {_PRIORITY_COLORS.get(task.priority, '#9a9a9a')}; font-weight: bold;")
        prio.clicked.connect(lambda _=False: self.priorityCycleRequested.emit(tid))
        meta.addWidget(prio)
        if task.due_date:
            due = QLabel(f"Due: {human_date(task.due_date) or '?'}")
            due.setStyleSheet("color: #ff6b6b; font-size: 11px;")
            meta.addWidget(due)
        created = QLabel(human_date(task.created_at) or "")
        created.setStyleSheet("color: #9a9a9a; font-size: 11px;")
        meta.addWidget(created)
        meta.addStretch(1)
        body.addLayout(meta)

        btn_edit = QToolButton()
        btn_edit.setText("Edit")
        btn_edit.clicked.connect(lambda _=False: self.editRequested.emit(tid))
        btn_delete = QToolButton()
        btn_delete.setText("Delete")
        btn_delete.clicked.connect(lambda _=False: self.deleteRequested.emit(tid))
        buttons = QVBoxLayout()
        buttons.addWidget(btn_edit)
        buttons.addWidget(btn_delete)

        row = QHBoxLayout(self)
        row.setContentsMargins(8, 6, 8, 6)
        row.addWidget(self._check, 0, Qt.AlignVCenter)
        row.addLayout(body, 1)
        row.addLayout(buttons)

# Rev 0.1.0
# taskpad - Main Window
# Search | sort chips + Reset | filter menu | task list | Add task

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from PySide6.QtCore import QSize, QTimer
from PySide6.QtWidgets import (
    QButtonGroup, QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QMainWindow, QMenu, QPushButton, QStackedWidget, QToolButton, QVBoxLayout, QWidget
)

from taskpad.services.editor_session import EditorSession
from taskpad.ui.task_editor_dialog import TaskEditorDialog
from taskpad.ui.task_row import TaskRow
from taskpad.ui.undo_dialog import UndoDeleteDialog
from taskpad.viewmodels.tasks_viewmodel import TasksViewModel

log = logging.getLogger(__name__)

_SORT_LABELS = (("newest", "Newest"), ("oldest", "Oldest"), ("alphabetical", "A → Z"))


class MainWindow(QMainWindow):
    def __init__(self, vm: TasksViewModel, *, settings: Optional[Dict[str, Any]] = None, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._settings = settings if settings is not None else {}
        self._editor_dialog: Optional[TaskEditorDialog] = None
        self._pending_rows: Optional[list] = None

        self.setWindowTitle("Tasks")
        geo = self._settings.get("main_window", {})
        self.resize(int(geo.get("width", 440)), int(geo.get("height", 760)))

        # ---------- top bar ----------
        header = QLabel("<b>Tasks</b><br/><small>A clean, professional to-do app</small>")
        self._btn_filter = QToolButton()
        self._btn_filter.setText("Filter")
        self._btn_filter.setPopupMode(QToolButton.InstantPopup)
        self._filter_menu = QMenu(self)
        self._filter_menu.aboutToShow.connect(self._refresh_filter_menu)
        self._btn_filter.setMenu(self._filter_menu)

        top_bar = QHBoxLayout()
        top_bar.addWidget(header, 1)
        top_bar.addWidget(self._btn_filter)

        # ---------- search ----------
        self._search = QLineEdit()
        self._search.setPlaceholderText("Search tasks...")
        self._search.setClearButtonEnabled(True)
        self._search.textChanged.connect(self._vm.set_query)

        # ---------- sort chips + reset ----------
        controls = QHBoxLayout()
        self._sort_group = QButtonGroup(self)
        self._sort_group.setExclusive(True)
        self._sort_buttons: Dict[str, QPushButton] = {}
        for key, label in _SORT_LABELS:
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.clicked.connect(lambda _=False, k=key: self._vm.set_sort(k))
            self._sort_group.addButton(btn)
            self._sort_buttons[key] = btn
            controls.addWidget(btn)
        controls.addStretch(1)
        btn_reset = QPushButton("Reset")
        btn_reset.clicked.connect(self._vm.reset_selection)
        controls.addWidget(btn_reset)

        # ---------- list / empty state ----------
        self._list = QListWidget()
        self._list.setSpacing(4)
        empty = QLabel(
            "<h3>No tasks — add one with the + button</h3>"
            "<p>Use the search, filters, or sorting to manage longer lists.</p>"
        )
        empty.setWordWrap(True)
        self._stack = QStackedWidget()
        self._stack.addWidget(self._list)
        self._stack.addWidget(empty)

        btn_add = QPushButton("+ Add task")
        btn_add.clicked.connect(lambda: self._vm.open_editor(None))
        bottom = QHBoxLayout()
        bottom.addStretch(1)
        bottom.addWidget(btn_add)

        central = QWidget(self)
        v = QVBoxLayout(central)
        v.addLayout(top_bar)
        v.addWidget(self._search)
        v.addLayout(controls)
        v.addWidget(self._stack, 1)
        v.addLayout(bottom)
        self.setCentralWidget(central)

        # ---------- undo prompt ----------
        self._undo = UndoDeleteDialog(self)
        self._undo.undoRequested.connect(self._vm.undo_delete)
        self._undo.dismissRequested.connect(self._vm.dismiss_undo)

        # ---------- VM wiring ----------
        self._vm.tasksReloaded.connect(self._on_tasks_reloaded)
        self._vm.selectionChanged.connect(self._on_selection_changed)
        self._vm.undoOffered.connect(self._undo.offer)
        self._vm.undoClosed.connect(self._undo.hide)
        self._vm.editorOpened.connect(self._on_editor_opened)
        self._vm.editorClosed.connect(self._on_editor_closed)

        s = self._vm.selection
        self._on_selection_changed(s.query, s.filter, s.sort)
        self._vm.reload()

    # -------------------- VM slots --------------------

    def _on_tasks_reloaded(self, total: int, rows: list) -> None:
        self.setWindowTitle(f"Tasks ({total})")
        # rebuild on the next loop turn: the sender may be a row we are about to delete
        if self._pending_rows is None:
            QTimer.singleShot(0, self._rebuild_list)
        self._pending_rows = rows

    def _rebuild_list(self) -> None:
        rows, self._pending_rows = self._pending_rows or [], None
        self._list.clear()
        for task in rows:
            row = TaskRow(task)
            row.toggleRequested.connect(self._vm.toggle_completed)
            row.priorityCycleRequested.connect(self._vm.cycle_priority)
            row.editRequested.connect(self._vm.open_editor)
            row.deleteRequested.connect(self._vm.delete_task)
            item = QListWidgetItem(self._list)
            item.setSizeHint(QSize(0, row.sizeHint().height()))
            self._list.setItemWidget(item, row)
        self._stack.setCurrentIndex(0 if rows else 1)

    def _on_selection_changed(self, query: str, task_filter: str, sort: str) -> None:
        if self._search.text() != query:
            self._search.blockSignals(True)
            self._search.setText(query)
            self._search.blockSignals(False)
        btn = self._sort_buttons.get(sort)
        if btn is not None:
            btn.setChecked(True)
        self._btn_filter.setText(f"Filter: {task_filter}")

    def _on_editor_opened(self, session: EditorSession) -> None:
        dlg = TaskEditorDialog(session, self)
        dlg.set_save_handler(self._vm.save_editor)
        dlg.rejected.connect(self._vm.cancel_editor)
        self._editor_dialog = dlg
        dlg.open()

    def _on_editor_closed(self) -> None:
        dlg, self._editor_dialog = self._editor_dialog, None
        if dlg is not None and dlg.isVisible():
            dlg.accept()

    # -------------------- filter menu --------------------

    def _refresh_filter_menu(self) -> None:
        counts = self._vm.counts()
        m = self._filter_menu
        m.clear()
        m.addAction(f"Filter: {self._vm.selection.filter}", lambda: self._vm.set_filter("all"))
        m.addAction(f"Show Active ({counts['active']})", lambda: self._vm.set_filter("active"))
        m.addAction(f"Show Completed ({counts['completed']})", lambda: self._vm.set_filter("completed"))
        m.addSeparator()
        m.addAction("Clear Completed", self._vm.clear_completed)

    # -------------------- lifecycle --------------------

    def closeEvent(self, event) -> None:
        self._settings.setdefault("main_window", {}).update(width=self.width(), height=self.height())
        log.debug("Main window closing at %dx%d", self.width(), self.height())
        super().closeEvent(event)

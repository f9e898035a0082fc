# Rev 0.1.0
from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from taskpad.models.entities import RemovedBatch, SelectionState, Task
from taskpad.models.types import FILTERS, SORTS, DEFAULT_FILTER, DEFAULT_SORT
from taskpad.services.editor_session import EditorSession
from taskpad.services.list_derivation import count_by_filter, derive_visible
from taskpad.services.task_store import TaskStore

SINGLE_UNDO_MESSAGE = "Task removed. You can undo this action."
BULK_UNDO_MESSAGE = "{n} tasks removed. You can undo this action."


class TasksViewModel(QObject):
    """
    VM for the task list window.
    Emits:
      - tasksReloaded(total: int, rows: list[Task])  visible rows after filter/search/sort
      - selectionChanged(query: str, filter: str, sort: str)
      - undoOffered(message: str) / undoClosed()
      - editorOpened(session: EditorSession) / editorClosed()
    """

    tasksReloaded = Signal(int, object)
    selectionChanged = Signal(str, str, str)
    undoOffered = Signal(str)
    undoClosed = Signal()
    editorOpened = Signal(object)
    editorClosed = Signal()

    def __init__(self, store: TaskStore):
        super().__init__()
        self._store = store
        self._selection = SelectionState()
        self._visible: List[Task] = []
        self._editor: Optional[EditorSession] = None
        self._unsubscribe = store.subscribe(lambda _tasks: self.reload())

    # ---- queries
    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def visible_tasks(self) -> List[Task]:
        return list(self._visible)

    @property
    def editor(self) -> Optional[EditorSession]:
        return self._editor

    def counts(self) -> dict:
        return count_by_filter(self._store.tasks)

    def reload(self) -> None:
        s = self._selection
        self._visible = derive_visible(self._store.tasks, s.query, s.filter, s.sort)
        self.tasksReloaded.emit(len(self._store), list(self._visible))

    # ---- selection
    def set_query(self, query: str) -> None:
        self._set_selection(query=query or "")

    def set_filter(self, task_filter: str) -> None:
        if task_filter not in FILTERS:
            raise ValueError(f"unknown filter: {task_filter!r}")
        self._set_selection(filter=task_filter)

    def set_sort(self, sort: str) -> None:
        if sort not in SORTS:
            raise ValueError(f"unknown sort: {sort!r}")
        self._set_selection(sort=sort)

    def reset_selection(self) -> None:
        self._set_selection(query="", filter=DEFAULT_FILTER, sort=DEFAULT_SORT)

    # ---- commands
    def toggle_completed(self, task_id: str) -> bool:
        return self._store.toggle_completed(task_id)

    def cycle_priority(self, task_id: str) -> bool:
        return self._store.cycle_priority(task_id)

    def delete_task(self, task_id: str) -> bool:
        if not self._store.remove(task_id):
            return False
        self.undoOffered.emit(SINGLE_UNDO_MESSAGE)
        return True

    def clear_completed(self) -> bool:
        if not self._store.clear_completed():
            return False
        entry = self._store.undo_buffer
        n = len(entry.tasks) if isinstance(entry, RemovedBatch) else 1
        self.undoOffered.emit(SINGLE_UNDO_MESSAGE if n == 1 else BULK_UNDO_MESSAGE.format(n=n))
        return True

    def undo_delete(self) -> List[Task]:
        restored = self._store.undo()
        self.undoClosed.emit()
        return restored

    def dismiss_undo(self) -> None:
        self._store.dismiss()
        self.undoClosed.emit()

    # ---- editor
    def open_editor(self, task_id: Optional[str] = None) -> Optional[EditorSession]:
        if task_id is None:
            session = EditorSession.open_new(self._store)
        else:
            session = EditorSession.open_edit(self._store, task_id)
            if session is None:
                return None
        self._editor = session
        self.editorOpened.emit(session)
        return session

    def save_editor(self) -> bool:
        if self._editor is None or not self._editor.save():
            return False
        self._editor = None
        self.editorClosed.emit()
        return True

    def cancel_editor(self) -> None:
        if self._editor is None:
            return
        self._editor.cancel()
        self._editor = None
        self.editorClosed.emit()

    # ---- internals
    def _set_selection(self, **changes) -> None:
        s = self._selection
        new = SelectionState(
            query=changes.get("query", s.query),
            filter=changes.get("filter", s.filter),
            sort=changes.get("sort", s.sort),
        )
        if new == s:
            return
        self._selection = new
        self.selectionChanged.emit(new.query, new.filter, new.sort)
        self.reload()

    def close(self) -> None:
        self._unsubscribe()

# Rev 0.1.0
from __future__ import annotations
import logging
from typing import Optional

from taskpad.models.types import Priority, DEFAULT_PRIORITY, is_priority
from taskpad.services.task_store import TaskStore
from taskpad.utils.dates import due_date_text, parse_due_date

log = logging.getLogger(__name__)


class EditorSession:
    """
    One add-or-edit form in progress.

    Holds a working copy of title/notes/priority/due_date that is independent
    of the store until save(). Opening for edit snapshots the task's values;
    later changes to the task do not leak into the form.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        task_id: Optional[str] = None,
        title: str = "",
        notes: str = "",
        priority: Priority = DEFAULT_PRIORITY,
        due_date: Optional[int] = None,
    ):
        self._store = store
        self._task_id = task_id
        self.title = title
        self.notes = notes
        self.priority: Priority = priority
        self.due_date = due_date
        self._open = True

    @classmethod
    def open_new(cls, store: TaskStore) -> "EditorSession":
        return cls(store)

    @classmethod
    def open_edit(cls, store: TaskStore, task_id: str) -> Optional["EditorSession"]:
        task = store.get(task_id)
        if task is None:
            return None
        return cls(
            store,
            task_id=task.id,
            title=task.title,
            notes=task.notes,
            priority=task.priority,
            due_date=task.due_date,
        )

    # ---- state
    @property
    def task_id(self) -> Optional[str]:
        return self._task_id

    @property
    def is_edit(self) -> bool:
        return self._task_id is not None

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def dialog_title(self) -> str:
        return "Edit task" if self.is_edit else "New task"

    @property
    def can_save(self) -> bool:
        return self._open and bool((self.title or "").strip())

    # ---- field helpers
    def set_priority(self, priority: str) -> None:
        if not is_priority(priority):
            raise ValueError(f"unknown priority: {priority!r}")
        self.priority = priority

    @property
    def due_date_text(self) -> str:
        return due_date_text(self.due_date)

    def set_due_date_text(self, text: str) -> bool:
        """Empty clears; unparseable input keeps the previous value and returns False."""
        if not (text or "").strip():
            self.due_date = None
            return True
        parsed = parse_due_date(text)
        if parsed is None:
            return False
        self.due_date = parsed
        return True

    # ---- lifecycle
    def save(self) -> bool:
        if not self.can_save:
            return False
        if self.is_edit:
            found = self._store.update(
                self._task_id,
                title=self.title,
                notes=self.notes,
                priority=self.priority,
                due_date=self.due_date,
            )
            if not found:
                log.info("Editor saved task %s, which no longer exists", self._task_id)
        else:
            self._store.add(self.title, self.notes, self.priority, self.due_date)
        self._open = False
        return True

    def cancel(self) -> None:
        self._open = False

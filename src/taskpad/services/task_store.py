# Rev 0.1.0
"""
In-memory task collection, single-slot undo buffer and all mutations.

The collection is newest-created-first by construction (add/undo prepend).
Every change to the collection is pushed to subscribers as a tuple snapshot;
persistence and the viewmodel both hang off subscribe().
"""
from __future__ import annotations
import dataclasses
import logging
from typing import Any, Callable, Iterable, List, Optional, Tuple

from taskpad.models.entities import RemovedBatch, RemovedTask, Task, UndoEntry, new_task_id, now_ms
from taskpad.models.types import cycle_priority, is_priority

log = logging.getLogger(__name__)

Listener = Callable[[Tuple[Task, ...]], None]

EDITABLE_FIELDS = frozenset({"title", "notes", "completed", "priority", "due_date"})
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


class TaskStore:
    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = new_task_id,
    ):
        self._tasks: List[Task] = list(tasks)
        self._undo: Optional[UndoEntry] = None
        self._clock = clock
        self._id_factory = id_factory
        self._listeners: List[Listener] = []

    # ---- read
    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def undo_buffer(self) -> Optional[UndoEntry]:
        return self._undo

    @property
    def can_undo(self) -> bool:
        return self._undo is not None

    def get(self, task_id: str) -> Optional[Task]:
        ix = self._index_of(task_id)
        return None if ix is None else self._tasks[ix]

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- change notification
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)
        self._changed()

    # ---- commands
    def add(self, title: str, notes: str = "", priority: str = "low", due_date: Optional[int] = None) -> Optional[Task]:
        title = (title or "").strip()
        if not title:
            return None
        if not is_priority(priority):
            raise ValueError(f"unknown priority: {priority!r}")
        task = Task(
            id=self._unique_id(),
            title=title,
            notes=notes or "",
            completed=False,
            priority=priority,
            created_at=self._clock(),
            due_date=due_date or None,
        )
        self._tasks.insert(0, task)
        log.debug("Added task %s", task.id)
        self._changed()
        return task

    def update(self, task_id: str, **changes: Any) -> bool:
        """
        Apply field changes to the task with this id.
        False when the id is unknown or the new title is blank.
        """
        frozen = IMMUTABLE_FIELDS.intersection(changes)
        if frozen:
            raise ValueError(f"immutable task field(s): {', '.join(sorted(frozen))}")
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"unknown task field(s): {', '.join(sorted(unknown))}")
        if "priority" in changes and not is_priority(changes["priority"]):
            raise ValueError(f"unknown priority: {changes['priority']!r}")

        ix = self._index_of(task_id)
        if ix is None:
            return False
        if "title" in changes:
            changes["title"] = (changes["title"] or "").strip()
            if not changes["title"]:
                return False
        if "notes" in changes:
            changes["notes"] = changes["notes"] or ""
        if "completed" in changes:
            changes["completed"] = bool(changes["completed"])

        self._tasks[ix] = dataclasses.replace(self._tasks[ix], **changes)
        log.debug("Updated task %s: %s", task_id, ", ".join(sorted(changes)))
        self._changed()
        return True

    def toggle_completed(self, task_id: str) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        return self.update(task_id, completed=not task.completed)

    def cycle_priority(self, task_id: str) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        return self.update(task_id, priority=cycle_priority(task.priority))

    def remove(self, task_id: str) -> bool:
        """
        Move one task into the undo buffer (replacing whatever was there).
        Returns True when an undo prompt should be shown. Unknown ids are a
        no-op and leave the buffer alone.
        """
        ix = self._index_of(task_id)
        if ix is None:
            log.debug("remove(%s): no such task", task_id)
            return False
        task = self._tasks.pop(ix)
        self._undo = RemovedTask(task)
        log.debug("Removed task %s", task_id)
        self._changed()
        return True

    def clear_completed(self) -> bool:
        done = tuple(t for t in self._tasks if t.completed)
        if not done:
            return False
        self._undo = RemovedBatch(done)
        self._tasks = [t for t in self._tasks if not t.completed]
        log.debug("Cleared %d completed task(s)", len(done))
        self._changed()
        return True

    def undo(self) -> List[Task]:
        """Reinsert the buffered task(s) at the head; always empties the buffer."""
        entry, self._undo = self._undo, None
        if entry is None:
            return []
        restored = [entry.task] if isinstance(entry, RemovedTask) else list(entry.tasks)
        self._tasks[0:0] = restored
        log.debug("Restored %d task(s)", len(restored))
        self._changed()
        return restored

    def dismiss(self) -> None:
        self._undo = None

    # ---- internals
    def _index_of(self, task_id: str) -> Optional[int]:
        for ix, t in enumerate(self._tasks):
            if t.id == task_id:
                return ix
        return None

    def _unique_id(self) -> str:
        # buffered tasks can come back via undo, so their ids stay reserved
        taken = {t.id for t in self._tasks}
        if isinstance(self._undo, RemovedTask):
            taken.add(self._undo.task.id)
        elif isinstance(self._undo, RemovedBatch):
            taken.update(t.id for t in self._undo.tasks)
        tid = self._id_factory()
        while tid in taken:
            tid = self._id_factory()
        return tid

    def _changed(self) -> None:
        snapshot = tuple(self._tasks)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                log.exception("Task store listener %r failed", listener)

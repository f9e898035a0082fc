# Rev 0.1.0
"""Task entity, undo-buffer entries and selection state.

Wire format (camelCase) is the JSON shape persisted under the storage key:
    {id, title, notes, completed, priority, createdAt, dueDate}
Python attributes are snake_case; to_record()/from_record() translate.
"""
from __future__ import annotations
import random
import string
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .types import Priority, TaskFilter, TaskSort, DEFAULT_PRIORITY, DEFAULT_FILTER, DEFAULT_SORT, is_priority

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 7

TaskRecord = Dict[str, Any]


def new_task_id() -> str:
    """7 random base-36 chars. Callers that need uniqueness must check the live collection."""
    return "".join(random.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    notes: str = ""
    completed: bool = False
    priority: Priority = DEFAULT_PRIORITY
    created_at: int = 0          # ms since epoch, set once
    due_date: Optional[int] = None

    def to_record(self) -> TaskRecord:
        return {
            "id": self.id,
            "title": self.title,
            "notes": self.notes,
            "completed": self.completed,
            "priority": self.priority,
            "createdAt": self.created_at,
            "dueDate": self.due_date,
        }

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> "Task":
        """
        Build a Task from a persisted record.
        Raises ValueError/TypeError/KeyError on anything that would break the
        model invariants (missing id, blank title, unknown priority, ...).
        """
        tid = raw["id"]
        if not isinstance(tid, str) or not tid:
            raise ValueError(f"bad task id: {tid!r}")
        title = raw["title"]
        if not isinstance(title, str) or not title.strip():
            raise ValueError(f"task {tid}: blank title")
        notes = raw.get("notes") or ""
        if not isinstance(notes, str):
            raise TypeError(f"task {tid}: notes must be a string")
        priority = raw.get("priority") or DEFAULT_PRIORITY
        if not is_priority(priority):
            raise ValueError(f"task {tid}: unknown priority {priority!r}")
        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError(f"task {tid}: completed must be true/false, got {completed!r}")
        return cls(
            id=tid,
            title=title,
            notes=notes,
            completed=completed,
            priority=priority,
            created_at=_timestamp(raw["createdAt"], field="createdAt"),
            due_date=(None if raw.get("dueDate") is None else _timestamp(raw["dueDate"], field="dueDate")),
        )


def _timestamp(value: Any, *, field: str) -> int:
    # bool is an int subclass; JSON true/false is never a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{field} must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field} must be a whole number of ms, got {value!r}")
    return int(value)


# ---- undo buffer entries

@dataclass(frozen=True)
class RemovedTask:
    """Single deletion awaiting undo/dismiss."""
    task: Task


@dataclass(frozen=True)
class RemovedBatch:
    """Bulk removal (clear completed); tasks keep their collection order."""
    tasks: Tuple[Task, ...]


UndoEntry = Union[RemovedTask, RemovedBatch]


@dataclass(frozen=True)
class SelectionState:
    query: str = ""
    filter: TaskFilter = DEFAULT_FILTER
    sort: TaskSort = DEFAULT_SORT

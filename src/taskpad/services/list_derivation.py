# Rev 0.1.0
"""Pure filter -> search -> sort pipeline producing the rows to display."""
from __future__ import annotations
import unicodedata
from typing import Dict, Iterable, List

from taskpad.models.entities import Task
from taskpad.models.types import FILTERS, SORTS


def _alpha_key(task: Task):
    # locale-free stand-in for localeCompare: "é" decomposes to sort beside "e";
    # lowercase goes before uppercase on ties
    title = task.title or ""
    return (unicodedata.normalize("NFKD", title).casefold(), title.swapcase())


def derive_visible(tasks: Iterable[Task], query: str = "", task_filter: str = "all", sort: str = "newest") -> List[Task]:
    if task_filter not in FILTERS:
        raise ValueError(f"unknown filter: {task_filter!r}")
    if sort not in SORTS:
        raise ValueError(f"unknown sort: {sort!r}")

    rows = list(tasks)
    if task_filter == "active":
        rows = [t for t in rows if not t.completed]
    elif task_filter == "completed":
        rows = [t for t in rows if t.completed]

    if query and query.strip():
        q = query.lower()
        rows = [t for t in rows if q in (t.title or "").lower() or q in (t.notes or "").lower()]

    # list.sort is stable: ties keep collection order
    if sort == "newest":
        rows.sort(key=lambda t: t.created_at, reverse=True)
    elif sort == "oldest":
        rows.sort(key=lambda t: t.created_at)
    else:
        rows.sort(key=_alpha_key)
    return rows


def count_by_filter(tasks: Iterable[Task]) -> Dict[str, int]:
    total = done = 0
    for t in tasks:
        total += 1
        done += bool(t.completed)
    return {"all": total, "active": total - done, "completed": done}

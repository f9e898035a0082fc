# taskpad type definitions
# Rev 0.1.0

from __future__ import annotations
from typing import Literal, Tuple

Priority = Literal["low", "medium", "high"]
TaskFilter = Literal["all", "active", "completed"]
TaskSort = Literal["newest", "oldest", "alphabetical"]

# Cycle order doubles as display order (Low | Medium | High)
PRIORITIES: Tuple[str, ...] = ("low", "medium", "high")
FILTERS: Tuple[str, ...] = ("all", "active", "completed")
SORTS: Tuple[str, ...] = ("newest", "oldest", "alphabetical")

DEFAULT_PRIORITY: Priority = "low"
DEFAULT_FILTER: TaskFilter = "all"
DEFAULT_SORT: TaskSort = "newest"


def cycle_priority(priority: str) -> Priority:
    """low -> medium -> high -> low. Anything unrecognised restarts at low."""
    if priority == "low":
        return "medium"
    if priority == "medium":
        return "high"
    return "low"


def is_priority(value: object) -> bool:
    return isinstance(value, str) and value in PRIORITIES

# Rev 0.1.0
"""
First-launch example tasks, used when nothing is stored under the storage key.
"""
from __future__ import annotations
from typing import Callable, List, Optional

from taskpad.models.entities import Task, new_task_id, now_ms

ONE_DAY_MS = 1000 * 60 * 60 * 24


def example_tasks(now: Optional[int] = None, id_factory: Callable[[], str] = new_task_id) -> List[Task]:
    now = now_ms() if now is None else now
    welcome_id = id_factory()
    trip_id = id_factory()
    while trip_id == welcome_id:
        trip_id = id_factory()
    return [
        Task(
            id=welcome_id,
            title="Welcome! Try this to-do app",
            notes="Tap the checkbox to complete. Use the trash icon to delete.",
            priority="medium",
            created_at=now,
        ),
        Task(
            id=trip_id,
            title="Plan a short trip",
            notes="Pack light, check weather, book lodging",
            priority="low",
            created_at=now - ONE_DAY_MS,
        ),
    ]

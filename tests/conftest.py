# Rev 0.1.0

"""Pytest fixtures for taskpad"""
from __future__ import annotations
import itertools
import pytest
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QThreadPool

from taskpad.models.entities import Task
from taskpad.repositories.db import Database
from taskpad.repositories.sqlite_kv_repository import SQLiteKeyValueRepository
from taskpad.repositories.task_persistence import TaskPersistence
from taskpad.services.task_store import TaskStore


class StepClock:
    """ms clock that advances by `step` on every read."""

    def __init__(self, start: int = 1_000, step: int = 100):
        self.now = start - step
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


def sequential_ids(prefix: str = "t") -> Callable[[], str]:
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def make_task(tid: str, title: str = "", *, created_at: int = 0, completed: bool = False, **kw) -> Task:
    return Task(id=tid, title=title or f"Task {tid}", created_at=created_at, completed=completed, **kw)


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture()
def kv(db: Database) -> SQLiteKeyValueRepository:
    return SQLiteKeyValueRepository(db.conn)


@pytest.fixture()
def pool():
    p = QThreadPool()
    p.setMaxThreadCount(1)
    yield p
    p.waitForDone()


@pytest.fixture()
def persistence(kv: SQLiteKeyValueRepository, pool: QThreadPool) -> TaskPersistence:
    return TaskPersistence(kv, "test-key", pool=pool)


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(clock: StepClock) -> TaskStore:
    return TaskStore(clock=clock, id_factory=sequential_ids())

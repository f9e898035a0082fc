# Rev 0.1.0
"""Persistence gateway: the whole task collection as one JSON array under one key.

load()        -> tasks (seed on first launch, [] when the stored blob is unusable)
save()        -> synchronous write, True/False
save_async()  -> fire-and-forget write on a QThreadPool worker

Failures are logged and swallowed here; memory stays authoritative and the
next successful save carries the full state again.
"""
from __future__ import annotations
import json
import logging
import sqlite3
from typing import Callable, Iterable, List, Optional, Sequence

from PySide6.QtCore import QRunnable, QThreadPool

from taskpad.models.entities import Task
from taskpad.repositories.sqlite_kv_repository import SQLiteKeyValueRepository

log = logging.getLogger(__name__)

STORAGE_KEY = "@my_todo_tasks_v1"


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False, separators=(",", ":"))


def decode_tasks(raw: str) -> List[Task]:
    """
    Parse a stored blob. Raises ValueError if it is not a JSON array.
    Malformed records and duplicate ids are skipped (first one wins).
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array of tasks, got {type(data).__name__}")
    out: List[Task] = []
    seen: set[str] = set()
    for idx, rec in enumerate(data):
        try:
            if not isinstance(rec, dict):
                raise TypeError(f"record is {type(rec).__name__}, not an object")
            task = Task.from_record(rec)
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Skipping stored task #%d: %s", idx, exc)
            continue
        if task.id in seen:
            log.warning("Skipping stored task #%d: duplicate id %s", idx, task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return out


class _SaveJob(QRunnable):
    def __init__(self, write: Callable[[str], bool], payload: str):
        super().__init__()
        self._write = write
        self._payload = payload
        self.setAutoDelete(True)

    def run(self) -> None:
        self._write(self._payload)


class TaskPersistence:
    def __init__(
        self,
        kv_repo: SQLiteKeyValueRepository,
        key: str = STORAGE_KEY,
        *,
        pool: Optional[QThreadPool] = None,
        seed: Optional[Callable[[], Sequence[Task]]] = None,
    ):
        self._kv = kv_repo
        self._key = key
        self._seed = seed
        self.seeded = False
        if pool is None:
            # one writer thread: saves land in the order they were issued
            pool = QThreadPool()
            pool.setMaxThreadCount(1)
        self._pool = pool

    @property
    def key(self) -> str:
        return self._key

    # ---- load
    def load(self) -> List[Task]:
        try:
            raw = self._kv.get_item(self._key)
        except sqlite3.Error:
            log.warning("Failed to load tasks (key=%s)", self._key, exc_info=True)
            return []
        if raw is None:
            tasks = list(self._seed()) if self._seed else []
            self.seeded = True
            log.info("No stored tasks under %s; starting with %d example task(s)", self._key, len(tasks))
            return tasks
        try:
            tasks = decode_tasks(raw)
        except (ValueError, RecursionError):
            # json.JSONDecodeError is a ValueError; deeply nested arrays hit the recursion limit
            log.warning("Failed to load tasks: stored value under %s is unreadable", self._key, exc_info=True)
            return []
        log.info("Loaded %d task(s) from %s", len(tasks), self._key)
        return tasks

    # ---- save
    def save(self, tasks: Iterable[Task]) -> bool:
        return self._write(encode_tasks(tasks))

    def save_async(self, tasks: Iterable[Task]) -> None:
        # serialize now, on the caller's thread: the job carries a snapshot
        self._pool.start(_SaveJob(self._write, encode_tasks(tasks)))

    def wait_for_pending(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)

    def _write(self, payload: str) -> bool:
        try:
            self._kv.set_item(self._key, payload)
        except (sqlite3.Error, OSError):
            log.warning("Failed to save tasks (key=%s)", self._key, exc_info=True)
            return False
        log.debug("Saved %d bytes under %s", len(payload), self._key)
        return True

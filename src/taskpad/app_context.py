# taskpad application context
# Rev 0.1.0

from __future__ import annotations
import logging
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from PySide6.QtCore import QThreadPool

from .repositories.db import MEMORY_DB, Database
from .repositories.sqlite_kv_repository import SQLiteKeyValueRepository
from .repositories.task_persistence import TaskPersistence
from .services.seed_tasks import example_tasks
from .services.task_store import TaskStore
from .utils.config import default_settings, storage_key
from .utils.logging_setup import get_logger


def _open_database(db_path: Path, log: logging.Logger) -> Database:
    """Open and migrate the storage DB; an unusable file degrades to an in-memory session."""
    try:
        db = Database(db_path)
    except (sqlite3.Error, OSError):
        log.warning("Cannot open %s; changes will not be kept this session", db_path, exc_info=True)
        db = Database(MEMORY_DB)
    try:
        db.run_migrations()
    except sqlite3.Error:
        log.warning("Migrating %s failed; changes will not be kept this session", db.path, exc_info=True)
        db.close()
        db = Database(MEMORY_DB)
        db.run_migrations()
    return db


@dataclass
class AppContext:
    """Central container for shared app resources."""
    db_path: Path
    db: Database
    kv: SQLiteKeyValueRepository
    persistence: TaskPersistence
    store: TaskStore
    settings: Dict[str, Any] = field(default_factory=default_settings)
    _unsubscribe: Optional[Callable[[], None]] = None

    @classmethod
    def create(
        cls,
        db_path: Path,
        settings: Optional[Dict[str, Any]] = None,
        *,
        pool: Optional[QThreadPool] = None,
    ) -> "AppContext":
        """Open DB, load (or seed) the collection, and mirror every change to storage."""
        log = get_logger("AppContext")
        settings = settings if settings is not None else default_settings()
        db = _open_database(db_path, log)
        kv = SQLiteKeyValueRepository(db.conn)
        persistence = TaskPersistence(kv, storage_key(settings), pool=pool, seed=example_tasks)

        store = TaskStore(persistence.load())
        unsubscribe = store.subscribe(persistence.save_async)
        # first launch: write the seed so the key exists from now on
        if persistence.seeded:
            persistence.save(store.tasks)

        log.info("AppContext initialized with DB=%s key=%s tasks=%d", db_path, persistence.key, len(store))
        return cls(
            db_path=Path(db_path), db=db, kv=kv, persistence=persistence,
            store=store, settings=settings, _unsubscribe=unsubscribe,
        )

    def shutdown(self, timeout_ms: int = 5000) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if not self.persistence.wait_for_pending(timeout_ms):
            get_logger("AppContext").warning("Pending saves did not finish within %d ms", timeout_ms)
        self.db.close()

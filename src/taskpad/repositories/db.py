# Rev 0.1.0

"""SQLite connection & migration runner
- WAL mode
- Applies the MIGRATIONS list in order
- Tracks applied names in schema_migrations(filename TEXT PRIMARY KEY, applied_at UTC)
"""
from __future__ import annotations
import logging
import sqlite3
from pathlib import Path
from datetime import datetime, timezone
from typing import List, Sequence, Tuple


from taskpad.utils.paths import DB_PATH, ensure_dirs

log = logging.getLogger(__name__)


# (name, sql) in apply order; never edit an applied entry, append a new one
MIGRATIONS: Sequence[Tuple[str, str]] = (
    (
        "0001_kv_store.sql",
        """
        CREATE TABLE IF NOT EXISTS kv_store (
            key        TEXT PRIMARY KEY,
            value      TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        """,
    ),
)


# sqlite in-memory database; used when the file on disk cannot be opened
MEMORY_DB = ":memory:"


class Database:
    def __init__(self, path: Path | str = DB_PATH) -> None:
        self.path = Path(path)
        if self.path == DB_PATH:
            ensure_dirs()
        elif str(path) != MEMORY_DB:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        # saves run on a pool thread; callers serialize access (see SQLiteKeyValueRepository)
        self.conn = sqlite3.connect(self.path, isolation_level=None, check_same_thread=False)
        try:
            self.conn.execute("PRAGMA journal_mode=WAL;")
            self.conn.execute(
                "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL)"
            )
        except sqlite3.Error:
            self.conn.close()
            raise

    def close(self) -> None:
        try:
            self.conn.close()
        except sqlite3.Error:
            log.warning("Closing %s failed", self.path, exc_info=True)

    def applied(self) -> set[str]:
        rows = self.conn.execute("SELECT filename FROM schema_migrations").fetchall()
        return {r[0] for r in rows}

    def apply_sql(self, sql: str) -> None:
        self.conn.executescript(sql)

    def run_migrations(self, migrations: Sequence[Tuple[str, str]] = MIGRATIONS) -> List[str]:
        applied = self.applied()
        to_apply = [(name, sql) for name, sql in migrations if name not in applied]
        for name, sql in to_apply:
            self.apply_sql(sql)
            self.conn.execute(
                "INSERT INTO schema_migrations(filename, applied_at) VALUES(?, ?)",
                (name, datetime.now(timezone.utc).isoformat()),
            )
            log.info("Applied migration %s to %s", name, self.path)
        return [name for name, _ in to_apply]

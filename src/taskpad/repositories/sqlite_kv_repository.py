# src/taskpad/repositories/sqlite_kv_repository.py
# Rev 0.1.0
from __future__ import annotations
import sqlite3
import threading
from datetime import datetime, timezone
from typing import List, Optional


class SQLiteKeyValueRepository:
    """
    Scoped string key -> string value storage on the kv_store table.

    Methods are safe to call from the save worker thread: every statement runs
    under one lock because the underlying connection is shared.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            row = self._conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc).isoformat(timespec="seconds")
        with self._lock:
            self._conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, now),
            )

    def remove_item(self, key: str) -> bool:
        with self._lock:
            cur = self._conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        return cur.rowcount > 0

    def keys(self) -> List[str]:
        with self._lock:
            rows = self._conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [r[0] for r in rows]

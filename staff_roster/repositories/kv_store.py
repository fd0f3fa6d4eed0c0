"""
Key-Value Store
Persists JSON documents in a single SQLite table, one row per key.
"""
import json
import logging
import sqlite3
import threading
from typing import Any, Optional

from staff_roster.config.settings import ROSTER_DB_PATH

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    JSON document store keyed by string. Every `set` replaces the whole
    document in one committed statement, so callers never observe a
    half-written value.
    """

    def __init__(self, db_path: str = ROSTER_DB_PATH):
        self.db_path = db_path
        # Thread-local storage for connection reuse (thread-safe)
        self._thread_local = threading.local()
        self._ensure_table()

    def _get_connection(self) -> sqlite3.Connection:
        """
        Get a thread-local database connection. Reuses connection within the same thread.
        """
        if getattr(self._thread_local, "connection", None) is None:
            self._thread_local.connection = sqlite3.connect(self.db_path, check_same_thread=False)
        return self._thread_local.connection

    def _ensure_table(self) -> None:
        conn = self._get_connection()
        conn.execute(
            "CREATE TABLE IF NOT EXISTS kv_store (key TEXT PRIMARY KEY, value TEXT NOT NULL);"
        )
        conn.commit()
        logger.debug("Key-value table ready in %s", self.db_path)

    def get(self, key: str) -> Optional[Any]:
        """Return the decoded document stored under `key`, or None if absent."""
        cur = self._get_connection().execute("SELECT value FROM kv_store WHERE key = ?;", (key,))
        row = cur.fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    def set(self, key: str, value: Any) -> None:
        conn = self._get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?);",
            (key, json.dumps(value)),
        )
        conn.commit()
        logger.debug("Wrote key %s", key)

    def delete(self, key: str) -> None:
        conn = self._get_connection()
        conn.execute("DELETE FROM kv_store WHERE key = ?;", (key,))
        conn.commit()

    def close(self) -> None:
        """Close the thread-local connection."""
        if getattr(self._thread_local, "connection", None) is not None:
            self._thread_local.connection.close()
            self._thread_local.connection = None

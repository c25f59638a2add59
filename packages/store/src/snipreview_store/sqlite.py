"""SQLiteStore — local file-based key-value store for review history.

Why SQLite as the local store:
- Batteries included: ships with Python, no extra dependencies.
- Cross-process locking for free: `BEGIN IMMEDIATE` serialises concurrent
  `snipreview review` runs writing to the same file.

Schema:
  kv — one row per key. History is a single JSON array under the
       `code_reviews` key, newest review first.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from snipreview_store.base import BaseStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key    TEXT PRIMARY KEY,
    value  TEXT NOT NULL
);
"""


class SQLiteStore(BaseStore):
    """Stores review history in a local SQLite database file.

    The database file path defaults to `.snipreview.db` in the current working
    directory. Configure via .snipreview.yml: `store_path: /path/to/history.db`.
    """

    def __init__(self, db_path: str = ".snipreview.db"):
        super().__init__()
        # isolation_level=None: autocommit, transactions are opened explicitly.
        self._conn = sqlite3.connect(db_path, isolation_level=None, check_same_thread=False)
        self._conn.executescript(_SCHEMA)
        logger.debug("Opened SQLite store at %s", db_path)

    def _get(self, key: str) -> str | None:
        row = self._conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return row[0] if row else None

    def _put(self, key: str, value: str) -> None:
        self._conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        self._conn.execute("BEGIN IMMEDIATE")
        try:
            yield
        except BaseException:
            self._conn.execute("ROLLBACK")
            raise
        self._conn.execute("COMMIT")

    def close(self) -> None:
        self._conn.close()

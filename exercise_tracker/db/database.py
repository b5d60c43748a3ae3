"""The tracker's SQLite store: one connection shared by every request."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from exercise_tracker.db.schema import SCHEMA_DDL

logger = logging.getLogger(__name__)


class Database:
    """
    Opened once at startup and passed to the repositories.

    The connection is created on first use and reopened after ``close()``.
    Reads go through ``fetchone``/``fetchall``; inserts run inside
    ``transaction()``.
    """

    def __init__(self, path: Optional[Path | str] = None):
        if path is None:
            from exercise_tracker.config import get_db_path
            path = get_db_path()
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            self._conn = conn
            logger.info("Connected to database at %s", self.path)
        return self._conn

    def init(self) -> None:
        """Create the users and exercises tables if they are missing."""
        self._connection.executescript(SCHEMA_DDL)
        self._connection.commit()
        logger.info("Created tables")

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connection
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        conn.commit()

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        row = self._connection.execute(sql, params).fetchone()
        return None if row is None else dict(row)

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        return [dict(row) for row in self._connection.execute(sql, params)]

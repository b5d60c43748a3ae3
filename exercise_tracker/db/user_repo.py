"""Repository for the ``users`` table."""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from exercise_tracker.db.database import Database
from exercise_tracker.errors import ConstraintViolation
from exercise_tracker.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Database):
        self._db = db

    def create(self, username: str) -> User:
        """Insert a new user. Raises ``ConstraintViolation`` on duplicate username."""
        try:
            with self._db.transaction() as conn:
                cur = conn.execute(
                    "INSERT INTO users (username) VALUES (?)", (username,)
                )
                user_id = cur.lastrowid
        except sqlite3.IntegrityError as exc:
            if "UNIQUE constraint failed" in str(exc):
                raise ConstraintViolation("Username already taken") from exc
            raise
        logger.info("Created user %s (%s)", user_id, username)
        return User(id=user_id, username=username)

    def get_by_id(self, user_id: int) -> Optional[User]:
        row = self._db.fetchone("SELECT id, username FROM users WHERE id = ?", (user_id,))
        return User.from_row(row) if row else None

    def list_all(self) -> list[User]:
        rows = self._db.fetchall("SELECT id, username FROM users ORDER BY id")
        return [User.from_row(r) for r in rows]

"""Repository for the ``exercises`` table."""

from __future__ import annotations

from typing import Any, Optional

from exercise_tracker.db.database import Database
from exercise_tracker.models.exercise import Exercise


class ExerciseRepository:
    def __init__(self, db: Database):
        self._db = db

    def create(self, user_id: int, description: str, duration: int, timestamp: str) -> int:
        """Insert an exercise and return its row id.

        The caller has already checked that ``user_id`` exists.
        """
        with self._db.transaction() as conn:
            cur = conn.execute(
                """INSERT INTO exercises (userId, description, duration, date)
                   VALUES (?, ?, ?, ?)""",
                (user_id, description, duration, timestamp),
            )
        return cur.lastrowid

    def query(
        self,
        user_id: int,
        from_ts: Optional[str] = None,
        to_ts: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> tuple[list[Exercise], int]:
        """
        Return ``(exercises, count)`` for a user.

        ``from_ts``/``to_ts`` are inclusive bounds on the normalized date.
        ``count`` is the size of the filtered set before ``limit`` is
        applied; it comes from a separate statement, so a concurrent insert
        can make it disagree with the returned rows.
        """
        clauses = ["userId = ?"]
        params: list[Any] = [user_id]
        if from_ts:
            clauses.append("date >= ?")
            params.append(from_ts)
        if to_ts:
            clauses.append("date <= ?")
            params.append(to_ts)
        where = " AND ".join(clauses)

        row = self._db.fetchone(
            f"SELECT COUNT(*) AS count FROM exercises WHERE {where}", tuple(params)
        )
        count = row["count"] if row else 0

        sql = f"SELECT * FROM exercises WHERE {where} ORDER BY id"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        rows = self._db.fetchall(sql, tuple(params))
        return [Exercise.from_row(r) for r in rows], count

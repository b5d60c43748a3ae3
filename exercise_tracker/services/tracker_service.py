"""Tracker service — validation and response shaping for users and exercises.

Sits between the HTTP layer and the repositories. Input checks run in a
fixed order and raise the errors in :mod:`exercise_tracker.errors`; database
failures are logged here and surfaced as ``StoreError`` with a generic
message.
"""

from __future__ import annotations

import logging
import math
import sqlite3
from typing import Any, Optional

from exercise_tracker import dates
from exercise_tracker.db.database import Database
from exercise_tracker.db.exercise_repo import ExerciseRepository
from exercise_tracker.db.user_repo import UserRepository
from exercise_tracker.errors import NotFoundError, StoreError, ValidationError
from exercise_tracker.models.user import User

logger = logging.getLogger(__name__)

USERNAME_REQUIRED = "Username is required"
SERVER_ERROR = "Server error"
SAVE_EXERCISE_ERROR = "Server error while saving exercise"
FIELDS_REQUIRED = "Description and duration are required."
INVALID_DURATION = "Duration must be a valid number"
INVALID_DATE = "Invalid date format."
INVALID_LIMIT = "Limit must be a valid number"
USER_NOT_FOUND = "User not found"

# SQLite INTEGER is a signed 64-bit value.
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _parse_duration(value: Any) -> Optional[int]:
    """Whole minutes from a numeric value or string; ``None`` if invalid."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not 0 <= number <= SQLITE_INT_MAX:
        return None
    minutes = int(number)
    return minutes if minutes <= SQLITE_INT_MAX else None


def _parse_user_id(value: Any) -> Optional[int]:
    try:
        user_id = int(str(value).strip())
    except ValueError:
        return None
    if not SQLITE_INT_MIN <= user_id <= SQLITE_INT_MAX:
        return None
    return user_id


def _parse_limit(value: Any) -> Optional[int]:
    if _is_blank(value):
        return None
    try:
        limit = int(str(value).strip())
    except ValueError:
        raise ValidationError(INVALID_LIMIT)
    if not 0 <= limit <= SQLITE_INT_MAX:
        raise ValidationError(INVALID_LIMIT)
    return limit


def _parse_bound(value: Any) -> Optional[str]:
    if _is_blank(value):
        return None
    parsed = dates.parse_date(value)
    if parsed is None:
        raise ValidationError(INVALID_DATE)
    return dates.normalize(parsed)


class TrackerService:
    """
    Facade for the four tracker operations.

    The ``Database`` is injected so the same service works against the
    startup connection or a throwaway test database.
    """

    def __init__(self, db: Database):
        self._db = db
        self._users = UserRepository(db)
        self._exercises = ExerciseRepository(db)

    # -- Users -----------------------------------------------------------------

    def create_user(self, username: Optional[str]) -> dict[str, Any]:
        if _is_blank(username):
            raise ValidationError(USERNAME_REQUIRED)
        try:
            user = self._users.create(username)  # type: ignore[arg-type]
        except (sqlite3.Error, OverflowError) as exc:
            logger.exception("Failed to create user %r", username)
            raise StoreError(SERVER_ERROR) from exc
        return {"username": user.username, "_id": user.id}

    def list_users(self) -> list[dict[str, Any]]:
        try:
            users = self._users.list_all()
        except (sqlite3.Error, OverflowError) as exc:
            logger.exception("Failed to list users")
            raise StoreError(SERVER_ERROR) from exc
        return [u.to_dict() for u in users]

    def _require_user(self, user_id: Any) -> User:
        parsed = _parse_user_id(user_id)
        user = self._users.get_by_id(parsed) if parsed is not None else None
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    # -- Exercises -------------------------------------------------------------

    def add_exercise(
        self,
        user_id: Any,
        description: Optional[str],
        duration: Any,
        date: Optional[str] = None,
    ) -> dict[str, Any]:
        if _is_blank(description) or _is_blank(duration):
            raise ValidationError(FIELDS_REQUIRED)
        minutes = _parse_duration(duration)
        if minutes is None:
            raise ValidationError(INVALID_DURATION)

        try:
            user = self._require_user(user_id)

            if _is_blank(date):
                when = dates.now()
            else:
                when = dates.parse_date(date)
                if when is None:
                    raise ValidationError(INVALID_DATE)

            self._exercises.create(user.id, description, minutes, dates.normalize(when))  # type: ignore[arg-type]
        except (sqlite3.Error, OverflowError) as exc:
            logger.exception("Failed to save exercise for user %s", user_id)
            raise StoreError(SAVE_EXERCISE_ERROR) from exc

        logger.info("Logged exercise for user %s: %s (%d min)", user.id, description, minutes)
        return {
            "_id": user.id,
            "username": user.username,
            "description": description,
            "duration": minutes,
            "date": dates.to_date_string(when),
        }

    def get_log(
        self,
        user_id: Any,
        from_: Optional[str] = None,
        to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> dict[str, Any]:
        try:
            user = self._require_user(user_id)
            exercises, count = self._exercises.query(
                user.id,
                from_ts=_parse_bound(from_),
                to_ts=_parse_bound(to),
                limit=_parse_limit(limit),
            )
        except (sqlite3.Error, OverflowError) as exc:
            logger.exception("Failed to read log for user %s", user_id)
            raise StoreError(SERVER_ERROR) from exc

        return {
            "_id": user.id,
            "username": user.username,
            "count": count,
            "log": [e.to_log_entry() for e in exercises],
        }

"""Database layer — SQLite with transactions and repository pattern."""

from exercise_tracker.db.database import Database
from exercise_tracker.db.schema import SCHEMA_DDL
from exercise_tracker.db.user_repo import UserRepository
from exercise_tracker.db.exercise_repo import ExerciseRepository

__all__ = ["Database", "SCHEMA_DDL", "UserRepository", "ExerciseRepository"]

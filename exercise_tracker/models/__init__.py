"""Domain models for the exercise tracker."""

from exercise_tracker.models.user import User
from exercise_tracker.models.exercise import Exercise

__all__ = ["User", "Exercise"]

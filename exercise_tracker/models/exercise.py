"""Exercise domain model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from exercise_tracker import dates


@dataclass
class Exercise:
    """One logged exercise. ``date`` holds the normalized storage string."""

    user_id: int
    description: str
    duration: int
    date: str
    id: Optional[int] = None

    @property
    def timestamp(self) -> datetime:
        return dates.from_normalized(self.date)

    def to_log_entry(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "duration": self.duration,
            "date": dates.to_date_string(self.timestamp),
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Exercise":
        return cls(
            id=row.get("id"),
            user_id=row["userId"],
            description=row["description"],
            duration=row["duration"],
            date=row["date"],
        )

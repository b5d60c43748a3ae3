"""User domain model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class User:
    """A tracked person. Created once, never updated or deleted."""

    id: int
    username: str

    def to_dict(self) -> dict[str, Any]:
        # ``_id`` is the public field name.
        return {"_id": self.id, "username": self.username}

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(id=row["id"], username=row["username"])

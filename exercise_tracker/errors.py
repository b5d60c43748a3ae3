"""Error taxonomy shared by the service and HTTP layers.

Each error carries the client-facing message and the HTTP status it maps
to. Store details never go into ``message``; they are logged instead.
"""

from __future__ import annotations


class TrackerError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Malformed or missing input."""
    status_code = 400


class NotFoundError(TrackerError):
    """Referenced user does not exist."""
    status_code = 404


class ConstraintViolation(TrackerError):
    """Uniqueness rule failed on insert (duplicate username)."""
    status_code = 400


class StoreError(TrackerError):
    """Any other persistence failure."""
    status_code = 500

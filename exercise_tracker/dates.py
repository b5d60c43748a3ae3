"""Date parsing, storage normalisation and display formatting.

Stored timestamps are UTC strings with millisecond precision and a ``Z``
suffix, so plain string comparison in SQL orders them chronologically.
Inputs without a timezone (including bare dates) are read as process-local
time, and display renders back in local time, so a calendar day given on
input is the calendar day shown on output.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
DISPLAY_FORMAT = "%a %b %d %Y"

# Non-ISO layouts accepted on input, tried in order.
_FALLBACK_FORMATS = (
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)


def now() -> datetime:
    """Current time as an aware local datetime."""
    return datetime.now().astimezone()


def _localize(dt: datetime) -> datetime:
    # Naive values are wall-clock local time.
    if dt.tzinfo is None:
        return dt.astimezone()
    return dt


def parse_date(value: Any) -> Optional[datetime]:
    """Parse *value* into an aware datetime, or ``None`` if it is not a date."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    parsed = _parse(text)
    if parsed is None:
        return None
    try:
        return _localize(parsed)
    except (OverflowError, OSError):
        # Outside the range the platform clock can represent.
        return None


def _parse(text: str) -> Optional[datetime]:
    iso = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def normalize(dt: datetime) -> str:
    """Canonical sortable storage form, e.g. ``2024-01-01T05:00:00.000Z``."""
    utc = _localize(dt).astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def from_normalized(text: str) -> datetime:
    return datetime.strptime(text, STORAGE_FORMAT).replace(tzinfo=timezone.utc)


def to_date_string(dt: datetime) -> str:
    """Human-readable local calendar date, e.g. ``Mon Jan 01 2024``."""
    return _localize(dt).astimezone().strftime(DISPLAY_FORMAT)

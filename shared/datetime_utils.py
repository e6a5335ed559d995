"""
Date/time helpers: framework-agnostic.

MongoDB hands back naive datetimes unless the client is tz-aware, so every
comparison against "now" goes through ``ensure_utc``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes and convert aware ones to UTC.

    Returns ``None`` when *value* is ``None``.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(value: datetime) -> datetime:
    """Midnight (UTC) of the day containing *value*."""
    value = ensure_utc(value)
    return value.replace(hour=0, minute=0, second=0, microsecond=0)

"""
General helper utilities for the artist database.

All persisted timestamps are UTC; these helpers produce and normalize them.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to UTC.

    Naive datetimes are taken to already be in UTC.

    Args:
        value: Datetime to normalize, or None

    Returns:
        Aware UTC datetime, or None if value was None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

"""Datetime helpers shared by the Timestamp Microservice API."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return the current time as a UTC-aware datetime.

    Examples:
        >>> utc_now().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime; aware datetimes pass through unchanged.

    Args:
        dt: Datetime to normalize (can be None)

    Returns:
        Timezone-aware datetime or None if input is None

    Examples:
        >>> ensure_utc(datetime(2024, 1, 15, 12, 30)).tzinfo == timezone.utc
        True

        >>> ensure_utc(None) is None
        True
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt

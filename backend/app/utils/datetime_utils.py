"""
Datetime utilities
Provides timezone-aware datetime functions to replace deprecated datetime.utcnow()
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC time with timezone awareness

    Example:
        >>> from app.utils.datetime_utils import utc_now
        >>> utc_now().tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Get current UTC time as ISO format string"""
    return utc_now().isoformat()


def ensure_utc(value: datetime) -> datetime:
    """
    Treat naive datetimes as UTC and convert aware ones to UTC

    SQLite drops tzinfo on read, so values coming back from the store may be naive.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

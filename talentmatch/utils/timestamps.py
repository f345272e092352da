"""Timestamp helpers for candidate activation windows.

Candidate listings carry an activation expiry; comparisons are only
meaningful between timezone-aware UTC datetimes, so everything coming from
upstream documents passes through ensure_utc() or parse_iso_datetime().
"""

from datetime import date, datetime, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC; aware ones are converted.

    Example:
        >>> naive = datetime(2026, 3, 4, 12, 0, 0)
        >>> ensure_utc(naive).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: str) -> Optional[datetime]:
    """Parse an ISO 8601 string to a UTC datetime.

    Accepts a trailing 'Z', explicit offsets, naive timestamps and bare dates.

    Returns:
        Timezone-aware datetime in UTC, or None if parsing fails

    Example:
        >>> parse_iso_datetime("2026-03-04T12:00:00Z").day
        4
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        pass

    try:
        return ensure_utc(datetime.strptime(cleaned, "%Y-%m-%d"))
    except ValueError:
        return None


def coerce_datetime(value: Any) -> Optional[datetime]:
    """Best-effort conversion of an upstream value to a UTC datetime.

    Handles datetime, date, ISO strings and Unix timestamps (seconds or
    milliseconds). Anything else yields None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        return parse_iso_datetime(value)
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an ISO 8601 UTC string with 'Z' suffix."""
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return None
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%SZ")

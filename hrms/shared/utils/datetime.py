"""
UTC datetime helpers.

Every datetime stored or compared by the core is timezone-aware UTC.
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a datetime to aware UTC at persistence boundaries.

    Naive values are assumed to already be UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_utc_day(value: date | datetime) -> datetime:
    """Midnight UTC of the given day."""
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min, tzinfo=UTC)

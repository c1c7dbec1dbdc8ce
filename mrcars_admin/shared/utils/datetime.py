"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12
        - datetime.now(UTC) - correct but verbose

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at store boundaries to normalize datetimes.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    # Aware datetime - convert to UTC
    return dt.astimezone(UTC)


def parse_iso_utc(value: str | datetime | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp (as returned by PostgREST) into UTC.

    Accepts a trailing 'Z' and naive values (assumed UTC). Returns None for
    missing or unparseable input so callers can decide how to degrade.

    Args:
        value: ISO string, datetime, or None

    Returns:
        UTC-aware datetime or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    return ensure_utc(parsed)


def month_start(dt: datetime) -> datetime:
    """Return the first instant (00:00 UTC, day 1) of dt's month."""
    dt = ensure_utc(dt)
    return datetime(dt.year, dt.month, 1, tzinfo=UTC)


def add_months(start: datetime, months: int) -> datetime:
    """
    Shift a month-start datetime by a number of months (negative for past).

    Args:
        start: A datetime on day 1 of a month
        months: Months to add

    Returns:
        First instant of the resulting month (UTC)
    """
    index = start.year * 12 + (start.month - 1) + months
    return datetime(index // 12, index % 12 + 1, 1, tzinfo=UTC)


def month_label(day: date) -> str:
    """Short English month name (e.g. 'Oct'), locale independent."""
    return _MONTH_LABELS[day.month - 1]


_MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

"""
Date helpers shared by the forecast table, usage trend and write path.

All stored timestamps are UTC.  Calendar-day bucketing uses the UTC date of a
timestamp; naive datetimes are assumed to already be UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def utc_today() -> date:
    """Return today's calendar date in UTC."""
    return utcnow().date()


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as a timezone-aware UTC datetime.

    Naive datetimes are tagged as UTC rather than converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_key(value: datetime | date) -> date:
    """Normalize a timestamp to its UTC calendar day."""
    if isinstance(value, datetime):
        return to_utc(value).date()
    return value


def add_days(base: date, days: int) -> date:
    """Return ``base`` shifted forward by ``days`` calendar days."""
    return base + timedelta(days=days)


def date_range(start: date, end: date, step_days: int = 1) -> list[date]:
    """Generate a list of dates from ``start`` to ``end`` (inclusive).

    Args:
        start: First date in the range.
        end: Last date in the range (inclusive).
        step_days: Step size in days (default 1).

    Returns:
        List of date objects.

    Raises:
        ValueError: If ``end < start`` or ``step_days < 1``.
    """
    if end < start:
        raise ValueError(f"end ({end}) must be >= start ({start}).")
    if step_days < 1:
        raise ValueError(f"step_days must be >= 1, got {step_days}.")

    result: list[date] = []
    current = start
    while current <= end:
        result.append(current)
        current += timedelta(days=step_days)
    return result


def trailing_window(end: date, days: int) -> list[date]:
    """Return the ``days`` calendar days ending at ``end`` (inclusive), oldest first.

    Raises:
        ValueError: If ``days < 1``.
    """
    if days < 1:
        raise ValueError(f"days must be >= 1, got {days}.")
    return date_range(end - timedelta(days=days - 1), end)


def parse_iso_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 date or datetime string into a UTC datetime.

    Accepts ``YYYY-MM-DD`` (midnight UTC), a trailing ``Z``, or an explicit
    offset.

    Raises:
        ValueError: If the string is not ISO 8601.
    """
    text = value.strip()
    if len(text) == 10:
        return datetime.combine(date.fromisoformat(text), datetime.min.time(), tzinfo=timezone.utc)
    return to_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))


def format_timestamp(value: datetime) -> str:
    """Render a datetime as fixed-width UTC ISO text for storage.

    Fixed width keeps lexical order equal to chronological order in SQLite.
    """
    return to_utc(value).strftime("%Y-%m-%dT%H:%M:%S.%fZ")

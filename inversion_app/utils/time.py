"""
Time utilities for calendar-day transactions and explicit clocks.

Transaction dates carry no time of day. Whenever one is compared with an
instant it is anchored at midnight UTC, and the instant itself is always
passed in (or produced by an injectable clock) so that computations stay
deterministic under test.
"""

import math
from datetime import date, datetime, time, timezone
from typing import Callable, Union

Clock = Callable[[], datetime]

SECONDS_PER_DAY = 86400


def utc_now() -> datetime:
    """Wall-clock time as an aware UTC datetime. Default clock."""
    return datetime.now(timezone.utc)


def ensure_utc(instant: Union[datetime, date]) -> datetime:
    """
    Normalize an instant to an aware UTC datetime.

    Args:
        instant: Aware or naive datetime, or a plain date

    Returns:
        Aware UTC datetime; naive values are taken to already be UTC and a
        plain date becomes its midnight
    """
    if not isinstance(instant, datetime):
        return day_start(instant)

    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)

    return instant.astimezone(timezone.utc)


def day_start(day: date) -> datetime:
    """Midnight UTC of a calendar day."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def parse_iso_date(value: str) -> date:
    """
    Parse a strict ``YYYY-MM-DD`` calendar day.

    Raises:
        ValueError: If the string is not exactly a calendar date
    """
    if len(value) != 10 or value[4] != "-" or value[7] != "-":
        raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")

    return date.fromisoformat(value)


def format_iso_date(day: date) -> str:
    """Render a calendar day as ``YYYY-MM-DD``."""
    return day.isoformat()


def days_between(day: date, as_of: Union[datetime, date]) -> int:
    """
    Whole days elapsed from a calendar day to an instant.

    The day is taken at midnight UTC and the elapsed time is floored, so an
    instant later on the same day counts as 0 and a future day is negative.

    Args:
        day: Transaction date
        as_of: Instant the elapsed time is measured to

    Returns:
        Floored whole days, negative when ``day`` lies after ``as_of``
    """
    elapsed = ensure_utc(as_of) - day_start(day)
    return math.floor(elapsed.total_seconds() / SECONDS_PER_DAY)


def elapsed_seconds(start: datetime, end: datetime) -> float:
    """Seconds between two instants."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds()

"""Date utility functions for togglPy."""
from datetime import datetime, date, time, timedelta, timezone, tzinfo
from typing import Optional, Tuple

from dateutil import tz

from ..errors import InvalidDateFormat, TimeConversionError


class SystemClock:
    """Clock returning the current instant in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock that always returns the instant it was created with."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware datetime")
        self.instant = instant.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self.instant


def local_timezone() -> tzinfo:
    """Get the timezone of the machine running the tool."""
    return tz.tzlocal()


def localize(naive: datetime, local_tz: tzinfo) -> datetime:
    """Attach a timezone to a naive wall-clock time.

    Args:
        naive: Wall-clock datetime without tzinfo
        local_tz: Timezone the wall-clock time belongs to

    Returns:
        Timezone-aware datetime

    Raises:
        TimeConversionError: If the wall-clock time does not exist in the
            timezone or occurs twice (DST transitions)
    """
    aware = naive.replace(tzinfo=local_tz)
    if not tz.datetime_exists(aware):
        raise TimeConversionError(f"Local time {naive.isoformat()} does not exist in {local_tz}")
    if tz.datetime_ambiguous(aware):
        raise TimeConversionError(f"Local time {naive.isoformat()} is ambiguous in {local_tz}")
    return aware


def local_midnight(day: date, local_tz: tzinfo) -> datetime:
    """Get local midnight of a calendar date as a UTC instant."""
    return localize(datetime.combine(day, time.min), local_tz).astimezone(timezone.utc)


def calc_day_range(reference: datetime, local_tz: tzinfo) -> Tuple[datetime, datetime]:
    """Get the start and end instants of the local day containing an instant.

    Args:
        reference: Timezone-aware instant within the day
        local_tz: Timezone defining the day

    Returns:
        Tuple of (start, end) in UTC, end being exactly 24 hours after start
    """
    local_day = reference.astimezone(local_tz).date()
    start = local_midnight(local_day, local_tz)
    return start, start + timedelta(days=1)


def calc_month_range(reference: datetime, local_tz: tzinfo) -> Tuple[datetime, datetime]:
    """Get the start and end instants of the local month containing an instant.

    Args:
        reference: Timezone-aware instant within the month
        local_tz: Timezone defining the month

    Returns:
        Tuple of (start, end) in UTC, end being local midnight of the
        first day of the following month
    """
    first = reference.astimezone(local_tz).date().replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return local_midnight(first, local_tz), local_midnight(next_first, local_tz)


def parse_date(value: str, local_tz: tzinfo) -> datetime:
    """Parse a YYYY-MM-DD literal as local midnight of that date.

    Raises:
        InvalidDateFormat: If the literal is not a valid date
    """
    try:
        day = datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as e:
        raise InvalidDateFormat(f"Failed to parse date '{value}', expected YYYY-MM-DD") from e
    return local_midnight(day, local_tz)


def parse_month(value: str, local_tz: tzinfo) -> datetime:
    """Parse a YYYY-MM literal as local midnight of the first of that month.

    Raises:
        InvalidDateFormat: If the literal is not a valid month
    """
    try:
        day = datetime.strptime(value, "%Y-%m").date()
    except (TypeError, ValueError) as e:
        raise InvalidDateFormat(f"Failed to parse month '{value}', expected YYYY-MM") from e
    return local_midnight(day, local_tz)


def to_rfc3339(instant: datetime) -> str:
    """Format an instant as an RFC 3339 string in UTC."""
    return instant.astimezone(timezone.utc).isoformat()


def format_local_hm(instant: Optional[datetime], local_tz: tzinfo, default: str = "now") -> str:
    """Format an instant as HH:MM in local time, or a default if missing."""
    if instant is None:
        return default
    return instant.astimezone(local_tz).strftime("%H:%M")

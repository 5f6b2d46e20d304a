"""Formatting and parsing utility functions for togglPy."""
from datetime import datetime

from dateutil.parser import isoparse

from ..errors import MalformedTimestamp


def format_hours(seconds: int) -> str:
    """Format seconds as decimal hours with two places.

    Args:
        seconds: Number of seconds

    Returns:
        Formatted hours (e.g. 3600 -> "1.00")
    """
    return f"{seconds / 3600:.2f}"


def format_hm(seconds: int) -> str:
    """Format seconds as HH:MM.

    Args:
        seconds: Number of seconds (can be negative)

    Returns:
        Formatted time string (with leading '-' if negative)
    """
    if seconds < 0:
        abs_seconds = abs(seconds)
        return f"-{abs_seconds // 3600:02}:{(abs_seconds % 3600) // 60:02}"
    return f"{seconds // 3600:02}:{(seconds % 3600) // 60:02}"


def parse_timestamp(value: str) -> datetime:
    """Parse a fixed-offset ISO 8601 timestamp as returned by Toggl.

    Args:
        value: Timestamp such as "2024-01-02T01:00:00+00:00" or "2024-01-02T01:00:00Z"

    Returns:
        Timezone-aware datetime

    Raises:
        MalformedTimestamp: If the value is not a timestamp with an offset
    """
    if not isinstance(value, str):
        raise MalformedTimestamp(f"Expected a timestamp string, got {value!r}")
    try:
        parsed = isoparse(value)
    except ValueError as e:
        raise MalformedTimestamp(f"Failed to parse timestamp {value!r}") from e
    if parsed.tzinfo is None:
        raise MalformedTimestamp(f"Timestamp {value!r} has no UTC offset")
    return parsed

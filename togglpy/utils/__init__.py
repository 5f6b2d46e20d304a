"""Utility modules for togglPy."""

from .date_utils import (SystemClock, FixedClock, local_timezone, calc_day_range, calc_month_range,
                         parse_date, parse_month, to_rfc3339)
from .format_utils import format_hours, format_hm, parse_timestamp
from .file_utils import write_markdown
from .log_utils import setup_logging, TRACE

__all__ = [
    'SystemClock', 'FixedClock', 'local_timezone', 'calc_day_range', 'calc_month_range',
    'parse_date', 'parse_month', 'to_rfc3339',
    'format_hours', 'format_hm', 'parse_timestamp',
    'write_markdown',
    'setup_logging', 'TRACE',
]

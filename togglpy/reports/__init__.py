"""Report generation modules for togglPy."""

from .time_entry import TimeEntry, join_time_entries
from .durations import calc_project_tag_durations, calc_daily_durations
from .presenter import ConsolePresenter

__all__ = ['TimeEntry', 'join_time_entries', 'calc_project_tag_durations', 'calc_daily_durations',
           'ConsolePresenter']

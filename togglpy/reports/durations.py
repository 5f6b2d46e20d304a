"""Aggregation of time entry durations by project and tag."""
from collections import defaultdict
from datetime import date, tzinfo
from typing import Dict, Iterable, List

from .time_entry import TimeEntry

# project name ("" for no project) -> tag name -> seconds
DurationTotals = Dict[str, Dict[str, int]]
DailyDurations = Dict[date, DurationTotals]


def calc_project_tag_durations(entries: Iterable[TimeEntry]) -> DurationTotals:
    """Sum durations per project and per tag.

    Entries that are still running are skipped. Every tag of an entry
    receives the entry's full duration, so a multi-tagged entry is counted
    once per tag.

    Args:
        entries: Joined time entries

    Returns:
        Mapping of project name to a mapping of tag name to seconds
    """
    totals: DurationTotals = {}
    for entry in entries:
        if entry.is_running:
            continue
        project_totals = totals.setdefault(entry.project or "", {})
        for tag in entry.tags:
            project_totals[tag] = project_totals.get(tag, 0) + entry.duration
    return totals


def group_by_local_date(entries: Iterable[TimeEntry], local_tz: tzinfo) -> Dict[date, List[TimeEntry]]:
    """Partition entries by the local date of their start, keeping order."""
    groups = defaultdict(list)
    for entry in entries:
        groups[entry.local_date(local_tz)].append(entry)
    return dict(groups)


def calc_daily_durations(entries: Iterable[TimeEntry], local_tz: tzinfo) -> DailyDurations:
    """Sum durations per project and tag separately for each local date."""
    return {
        day: calc_project_tag_durations(day_entries)
        for day, day_entries in group_by_local_date(entries, local_tz).items()
    }

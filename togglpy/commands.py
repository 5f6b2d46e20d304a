"""The daily and monthly report commands."""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, tzinfo
from typing import List, Optional

from .api.client import TogglRepository
from .reports.durations import DailyDurations, DurationTotals, calc_daily_durations, calc_project_tag_durations
from .reports.time_entry import TimeEntry, join_time_entries
from .utils.date_utils import calc_day_range, calc_month_range

logger = logging.getLogger(__name__)


def fetch_time_entries(repository: TogglRepository, start: datetime, end: datetime) -> List[TimeEntry]:
    """Read time entries and projects concurrently and join them.

    Args:
        repository: Source of time entries and projects
        start: Start of the range (UTC)
        end: End of the range (UTC)

    Returns:
        Joined time entries in API order
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        entries_future = executor.submit(repository.read_time_entries, start, end)
        projects_future = executor.submit(repository.read_projects)
        raw_entries = entries_future.result()
        projects = projects_future.result()
    logger.debug("Joining %d time entries with %d projects", len(raw_entries), len(projects))
    return join_time_entries(raw_entries, projects)


class DailyCommand:
    """Lists the time entries of one local day.

    Args:
        repository: Source of time entries and projects
        clock: Provides the current instant when no date is given
        local_tz: Timezone defining the day
    """

    def __init__(self, repository: TogglRepository, clock, local_tz: tzinfo):
        self.repository = repository
        self.clock = clock
        self.local_tz = local_tz

    def run(self, date: Optional[datetime] = None) -> List[TimeEntry]:
        """Get the entries of the local day containing `date` (default: now)."""
        reference = date if date is not None else self.clock.now()
        start_at, end_at = calc_day_range(reference, self.local_tz)

        logger.info("Start at: %s, End at: %s", start_at, end_at)
        entries = fetch_time_entries(self.repository, start_at, end_at)
        logger.info("Time entries retrieved successfully.")
        return entries


class MonthlyCommand:
    """Totals the time entries of one local month by project and tag.

    Args:
        repository: Source of time entries and projects
        clock: Provides the current instant when no month is given
        local_tz: Timezone defining the month and its days
    """

    def __init__(self, repository: TogglRepository, clock, local_tz: tzinfo):
        self.repository = repository
        self.clock = clock
        self.local_tz = local_tz

    def _fetch_month(self, month: Optional[datetime]) -> List[TimeEntry]:
        reference = month if month is not None else self.clock.now()
        start_at, end_at = calc_month_range(reference, self.local_tz)

        logger.info("Start at: %s, End at: %s", start_at, end_at)
        entries = fetch_time_entries(self.repository, start_at, end_at)
        logger.info("Time entries retrieved successfully.")
        return entries

    def run_monthly_duration(self, month: Optional[datetime] = None) -> DurationTotals:
        """Get project and tag totals for the month containing `month` (default: now)."""
        return calc_project_tag_durations(self._fetch_month(month))

    def run_daily_duration(self, month: Optional[datetime] = None) -> DailyDurations:
        """Get project and tag totals for each day of the month containing `month`."""
        return calc_daily_durations(self._fetch_month(month), self.local_tz)

"""Console rendering of time entries and duration totals."""
import sys
from datetime import tzinfo
from typing import Iterable, List, Optional, TextIO

from tabulate import tabulate

from .durations import DailyDurations, DurationTotals
from .time_entry import TimeEntry
from ..utils.format_utils import format_hm, format_hours

NO_PROJECT = "No project"
FORMATS = ("list", "table")


def sort_by_start(entries: Iterable[TimeEntry]) -> List[TimeEntry]:
    """Sort entries by start time; entries starting together keep their order."""
    return sorted(entries, key=lambda entry: entry.start)


def project_label(name: str) -> str:
    """Get the display name of a project.

    Args:
        name: Project name, empty for entries without a project

    Returns:
        The name, or "No project" if it is empty
    """
    return name or NO_PROJECT


class ConsolePresenter:
    """Writes reports as a markdown list or a github-style table.

    Args:
        local_tz: Timezone used to display times
        output: Stream to write to (defaults to stdout)
        fmt: "list" or "table"
    """

    def __init__(self, local_tz: tzinfo, output: Optional[TextIO] = None, fmt: str = "list"):
        if fmt not in FORMATS:
            raise ValueError(f"Unknown output format: {fmt}")
        self.local_tz = local_tz
        self.output = output if output is not None else sys.stdout
        self.fmt = fmt

    def _write(self, text: str):
        print(text, file=self.output)

    def show_time_entries(self, entries: Iterable[TimeEntry]):
        """Show entries ordered by start time."""
        sorted_entries = sort_by_start(entries)
        if self.fmt == "table":
            if not sorted_entries:
                return
            rows = [
                [entry.start_hm(self.local_tz), entry.stop_hm(self.local_tz), entry.description,
                 entry.project or "", entry.tags_str,
                 "" if entry.is_running else format_hm(entry.duration)]
                for entry in sorted_entries
            ]
            self._write(tabulate(rows, headers=["Start", "Stop", "Description", "Project", "Tags", "Duration"],
                                 tablefmt="github", disable_numparse=True))
            return

        for entry in sorted_entries:
            self._write(f"- {entry.start_hm(self.local_tz)} ~ {entry.stop_hm(self.local_tz)}: {entry.description}")

    def show_durations(self, totals: DurationTotals):
        """Show hours per project and tag, both in name order."""
        if self.fmt == "table":
            rows = [
                [project_label(project), tag, format_hours(seconds)]
                for project in sorted(totals)
                for tag, seconds in sorted(totals[project].items())
            ]
            if rows:
                self._write(tabulate(rows, headers=["Project", "Tag", "Hours"], tablefmt="github",
                                     disable_numparse=True))
            return

        for project in sorted(totals):
            self._write(f"- {project_label(project)}")
            for tag, seconds in sorted(totals[project].items()):
                self._write(f"    - {tag}: {format_hours(seconds)}")

    def show_daily_durations(self, daily: DailyDurations):
        """Show duration totals for each date, oldest first."""
        for i, day in enumerate(sorted(daily)):
            if i:
                self._write("")
            self._write(f"## {day.isoformat()}")
            self._write("")
            self.show_durations(daily[day])

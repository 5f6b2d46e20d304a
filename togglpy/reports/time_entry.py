"""TimeEntry class and the join of raw Toggl entries with their projects."""
from dataclasses import dataclass
from datetime import datetime, date, tzinfo
from typing import Dict, Iterable, List, Optional, Tuple

from ..api.client import Project, TogglTimeEntry
from ..errors import MalformedTimestamp
from ..utils.date_utils import format_local_hm
from ..utils.format_utils import parse_timestamp


@dataclass(frozen=True)
class TimeEntry:
    """A Toggl time entry joined with the name of its project."""

    start: datetime
    stop: Optional[datetime]
    duration: int
    description: str
    project: Optional[str] = None
    tags: Tuple[str, ...] = ()

    @property
    def is_running(self) -> bool:
        """Whether the entry has not been stopped yet."""
        return self.stop is None

    @property
    def tags_str(self) -> str:
        """Get tags as a comma-separated string."""
        return ", ".join(self.tags)

    def local_date(self, local_tz: tzinfo) -> date:
        """Get the local calendar date the entry started on."""
        return self.start.astimezone(local_tz).date()

    def start_hm(self, local_tz: tzinfo) -> str:
        """Get formatted start time.

        Args:
            local_tz: Timezone to display the time in

        Returns:
            Formatted start time (HH:MM)
        """
        return format_local_hm(self.start, local_tz)

    def stop_hm(self, local_tz: tzinfo) -> str:
        """Get formatted stop time.

        Args:
            local_tz: Timezone to display the time in

        Returns:
            Formatted stop time (HH:MM), or "now" if the entry is running
        """
        return format_local_hm(self.stop, local_tz)


def project_names(projects: Iterable[Project]) -> Dict[int, str]:
    """Build a project id to name lookup table."""
    return {project.id: project.name for project in projects}


def join_time_entries(raw_entries: Iterable[TogglTimeEntry], projects: Iterable[Project]) -> List[TimeEntry]:
    """Merge raw time entries with the names of their projects.

    An entry whose project is unknown (e.g. deleted after the entry was
    recorded) gets no project name.

    Args:
        raw_entries: Time entries as returned by the API
        projects: Projects of the user

    Returns:
        Joined entries, in the order of raw_entries

    Raises:
        MalformedTimestamp: If a start or stop timestamp cannot be parsed
    """
    names = project_names(projects)
    entries = []
    for raw in raw_entries:
        try:
            start = parse_timestamp(raw.start)
            stop = parse_timestamp(raw.stop) if raw.stop is not None else None
        except MalformedTimestamp as e:
            raise MalformedTimestamp(f"Time entry {raw.id} has a malformed timestamp") from e
        entries.append(TimeEntry(
            start=start,
            stop=stop,
            duration=raw.duration,
            description=raw.description,
            project=names.get(raw.project_id) if raw.project_id is not None else None,
            tags=tuple(raw.tags),
        ))
    return entries

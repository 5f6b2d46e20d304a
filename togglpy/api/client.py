"""
TogglClient: A client for reading time entries and projects from the Toggl Track API.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

import requests
from requests.auth import HTTPBasicAuth

from ..errors import DeserializationError, RemoteRequestError
from ..utils.date_utils import to_rfc3339

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.track.toggl.com/api/v9"
# Toggl expects this literal as the password when authenticating with a token
API_TOKEN_PASSWORD = "api_token"


@dataclass(frozen=True)
class TogglTimeEntry:
    """A time entry as returned by the Toggl API."""

    id: int
    description: str
    start: str
    stop: Optional[str]
    duration: int
    project_id: Optional[int] = None
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Project:
    """A Toggl project."""

    id: int
    name: str


class TogglRepository(Protocol):
    """Read operations the reports need from Toggl."""

    def read_time_entries(self, start: datetime, end: datetime) -> List[TogglTimeEntry]:
        ...

    def read_projects(self) -> List[Project]:
        ...


def _require(data: Dict[str, Any], key: str, types, what: str, optional: bool = False) -> Any:
    """Get a key from a JSON object, checking its type.

    Raises:
        DeserializationError: If the key is missing or has the wrong type
    """
    if key not in data or data[key] is None:
        if optional:
            return None
        raise DeserializationError(f"{what} is missing required field '{key}'")
    value = data[key]
    # bool is a subclass of int but never a valid id or duration
    if isinstance(value, bool):
        raise DeserializationError(f"{what} field '{key}' has unexpected type bool")
    if not isinstance(value, types):
        raise DeserializationError(f"{what} field '{key}' has unexpected type {type(value).__name__}")
    return value


def parse_time_entry(data: Any) -> TogglTimeEntry:
    """Convert a JSON object from /me/time_entries into a TogglTimeEntry.

    Raises:
        DeserializationError: If the object does not look like a time entry
    """
    if not isinstance(data, dict):
        raise DeserializationError(f"Expected a time entry object, got {type(data).__name__}")
    entry_id = _require(data, "id", int, "Time entry")
    what = f"Time entry {entry_id}"
    tags = _require(data, "tags", list, what, optional=True) or []
    if not all(isinstance(tag, str) for tag in tags):
        raise DeserializationError(f"{what} field 'tags' must be a list of strings")
    return TogglTimeEntry(
        id=entry_id,
        description=_require(data, "description", str, what, optional=True) or "",
        start=_require(data, "start", str, what),
        stop=_require(data, "stop", str, what, optional=True),
        duration=_require(data, "duration", int, what),
        project_id=_require(data, "project_id", int, what, optional=True),
        tags=list(tags),
    )


def parse_project(data: Any) -> Project:
    """Convert a JSON object from /me/projects into a Project.

    Raises:
        DeserializationError: If the object does not look like a project
    """
    if not isinstance(data, dict):
        raise DeserializationError(f"Expected a project object, got {type(data).__name__}")
    project_id = _require(data, "id", int, "Project")
    return Project(id=project_id, name=_require(data, "name", str, f"Project {project_id}"))


class TogglClient:
    """A client for interacting with the Toggl Track API."""

    def __init__(self, api_token: str, base_url: str = DEFAULT_API_URL,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        """Initialize the TogglClient.

        Args:
            api_token: Toggl API token
            base_url: API base URL (optional)
            timeout: Request timeout in seconds (optional)
            session: requests session to use (optional)
        """
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def api_get(self, url: str, params: Optional[dict] = None) -> Any:
        """Make a GET request to the Toggl API.

        Args:
            url: API endpoint URL
            params: Query parameters (optional)

        Returns:
            API response as JSON

        Raises:
            RemoteRequestError: If the request fails or returns an error status
            DeserializationError: If the response body is not JSON
        """
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = self.session.get(
                url,
                params=params,
                auth=HTTPBasicAuth(self.api_token, API_TOKEN_PASSWORD),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise RemoteRequestError(f"Request to {url} returned an error status {status}") from e
        except requests.RequestException as e:
            raise RemoteRequestError(f"Failed to send request to Toggl API at {url}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise DeserializationError(f"Response from {url} is not valid JSON") from e

    def read_time_entries(self, start: datetime, end: datetime) -> List[TogglTimeEntry]:
        """Get time entries that started within a range.

        Args:
            start: Start of the range (inclusive)
            end: End of the range (exclusive)

        Returns:
            List of time entries in API order
        """
        url = f"{self.base_url}/me/time_entries"
        params = {
            "start_date": to_rfc3339(start),
            "end_date": to_rfc3339(end),
        }
        data = self.api_get(url, params)
        if not isinstance(data, list):
            raise DeserializationError(f"Expected a list of time entries from {url}, got {type(data).__name__}")
        try:
            entries = [parse_time_entry(item) for item in data]
        except DeserializationError as e:
            raise DeserializationError(f"Failed to deserialize time entries from {url}") from e
        logger.debug("Read %d time entries", len(entries))
        return entries

    def read_projects(self) -> List[Project]:
        """Get all projects of the authenticated user.

        Returns:
            List of projects
        """
        url = f"{self.base_url}/me/projects"
        data = self.api_get(url)
        # Toggl answers null instead of [] for users without projects
        if data is None:
            return []
        if not isinstance(data, list):
            raise DeserializationError(f"Expected a list of projects from {url}, got {type(data).__name__}")
        try:
            projects = [parse_project(item) for item in data]
        except DeserializationError as e:
            raise DeserializationError(f"Failed to deserialize projects from {url}") from e
        logger.debug("Read %d projects", len(projects))
        return projects

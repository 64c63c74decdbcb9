import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from schedule_viewer.models.group import Group
from schedule_viewer.models.schedule_view import ScheduleView
from schedule_viewer.utils.utils import parse_groups, parse_schedule_view

logger = logging.getLogger(__name__)


class ScheduleFetchError(Exception):
    """Raised when the schedule backend cannot deliver a response"""


class ScheduleClient:
    """
    Read-only client for the schedule backend REST API.

    Args:
        base_url: API root, e.g. "http://localhost:8080/api"
        timeout: Request timeout in seconds
        session: Optional requests.Session to reuse
    """

    def __init__(self, base_url: str, timeout: float = 10, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_schedule_view(self, group_id: Optional[str] = None,
                            teacher_id: Optional[str] = None,
                            room_name: Optional[str] = None) -> ScheduleView:
        """
        Fetches the schedule view, optionally pre-filtered by the backend.

        At most one of group_id, teacher_id and room_name may be given.

        Raises:
            ValueError: more than one scope given
            ScheduleFetchError: the backend could not be reached or answered badly
        """
        scopes = [(name, value) for name, value in
                  (("group", group_id), ("teacher", teacher_id), ("room", room_name)) if value]
        if len(scopes) > 1:
            raise ValueError(f"Only one schedule scope allowed, got {[name for name, _ in scopes]}")

        path = "/schedule/view"
        if scopes:
            name, value = scopes[0]
            path += f"/{name}/{quote(str(value), safe='')}"

        data = self._get_json(path)
        if not isinstance(data, dict):
            raise ScheduleFetchError(f"Unexpected schedule view payload from {path}: {type(data).__name__}")

        view = parse_schedule_view(data)
        logger.info(f"Fetched schedule view {path}: {len(view.entries)} entries, "
                    f"{view.total_assignments} assignments")
        return view

    def fetch_groups(self) -> List[Group]:
        """Fetches the group catalog"""
        data = self._get_json("/groups")
        if not isinstance(data, list):
            raise ScheduleFetchError(f"Unexpected group catalog payload: {type(data).__name__}")
        return parse_groups(data)

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise ScheduleFetchError(f"Failed to load {url}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ScheduleFetchError(f"Invalid JSON from {url}: {e}") from e

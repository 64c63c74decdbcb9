"""Tests for the schedule backend client, using a fake HTTP session."""

import pytest
import requests

from schedule_viewer.services.schedule_client import ScheduleClient, ScheduleFetchError

VIEW = {
    "entries": [{
        "groupId": "g1", "groupName": "1A", "courseName": "Math",
        "dayOfWeek": 1, "startHour": 9, "lengthHours": 2,
    }],
    "totalAssignments": 1,
    "assignedCount": 1,
    "unassignedCount": 0,
}


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


def make_client(responses):
    session = FakeSession(responses)
    return ScheduleClient("http://backend/api/", timeout=3, session=session), session


def test_fetch_full_view():
    client, session = make_client({"http://backend/api/schedule/view": FakeResponse(VIEW)})
    view = client.fetch_schedule_view()

    assert session.calls == [("http://backend/api/schedule/view", 3)]
    assert [e.course_name for e in view.entries] == ["Math"]
    assert view.total_assignments == 1


@pytest.mark.parametrize("kwargs, url", [
    ({"group_id": "g1"}, "http://backend/api/schedule/view/group/g1"),
    ({"teacher_id": "t1"}, "http://backend/api/schedule/view/teacher/t1"),
    ({"room_name": "Lab 2"}, "http://backend/api/schedule/view/room/Lab%202"),
])
def test_fetch_scoped_view(kwargs, url):
    client, session = make_client({url: FakeResponse(VIEW)})
    client.fetch_schedule_view(**kwargs)
    assert session.calls[0][0] == url


def test_only_one_scope_allowed():
    client, _ = make_client({})
    with pytest.raises(ValueError):
        client.fetch_schedule_view(group_id="g1", room_name="R1")


def test_http_error_raises_fetch_error():
    client, _ = make_client({"http://backend/api/schedule/view": FakeResponse(status_code=500)})
    with pytest.raises(ScheduleFetchError, match="Failed to load"):
        client.fetch_schedule_view()


def test_connection_error_raises_fetch_error():
    client, _ = make_client({
        "http://backend/api/groups": requests.exceptions.ConnectionError("refused"),
    })
    with pytest.raises(ScheduleFetchError, match="refused"):
        client.fetch_groups()


def test_invalid_json_raises_fetch_error():
    client, _ = make_client({"http://backend/api/schedule/view": FakeResponse(invalid_json=True)})
    with pytest.raises(ScheduleFetchError, match="Invalid JSON"):
        client.fetch_schedule_view()


def test_unexpected_payload_shape():
    client, _ = make_client({"http://backend/api/groups": FakeResponse({"id": "g1"})})
    with pytest.raises(ScheduleFetchError):
        client.fetch_groups()


def test_fetch_groups():
    client, _ = make_client({"http://backend/api/groups": FakeResponse([
        {"id": "g1", "name": "1A", "preferredRoomName": "R101"},
    ])})
    groups = client.fetch_groups()
    assert [(g.id, g.name, g.preferred_room_name) for g in groups] == [("g1", "1A", "R101")]

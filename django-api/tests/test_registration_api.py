"""Integration tests for the registration HTTP API.

Run with: pytest tests/test_registration_api.py -v
"""

import csv
import io
from datetime import timedelta
from unittest.mock import patch

import pytest
from freezegun import freeze_time
from rest_framework.test import APIClient

from events.domain import Event
from events.models import Registration
from events.services import get_event_service
from tests.conftest import EVENT_START


def create_event(kind="builder", options=("A", "B"), name="Tower Launch") -> Event:
    return get_event_service().create(
        name=name,
        start_time=EVENT_START,
        end_time=EVENT_START + timedelta(hours=1),
        schema_kind=kind,
        options=list(options),
    )


def registration_body(**overrides):
    body = {
        "name": "Asha Rao",
        "phoneNumber": "9000000001",
        "flatNo": "1204",
        "wing": "B",
        "selection": "A",
    }
    body.update(overrides)
    return body


def post_registration(client: APIClient, event_id, **overrides):
    return client.post(
        f"/api/events/{event_id}/registrations", registration_body(**overrides), format="json"
    )


@pytest.fixture
def delay():
    with patch("events.tasks.send_registration_notification.delay") as mocked:
        yield mocked


@pytest.mark.django_db
class TestEventCreate:
    """Tests for POST /api/events"""

    def test_create_event(self, api_client: APIClient, settings):
        settings.REGISTRATION_BASE_URL = "https://register.example.com/"
        response = api_client.post(
            "/api/events",
            {
                "name": "Tower Launch",
                "startTime": "2026-01-10T10:00:00Z",
                "endTime": "2026-01-10T11:00:00Z",
                "selectionSchema": {"kind": "product", "options": ["1BHK", "2BHK"]},
            },
            format="json",
        )
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Tower Launch"
        assert data["selectionSchema"] == {"kind": "product", "options": ["1BHK", "2BHK"]}
        assert data["qrLinkTarget"] == f"https://register.example.com/events/{data['id']}"

    def test_create_invalid_window(self, api_client: APIClient):
        response = api_client.post(
            "/api/events",
            {
                "name": "Tower Launch",
                "startTime": "2026-01-10T11:00:00Z",
                "endTime": "2026-01-10T10:00:00Z",
                "selectionSchema": {"kind": "builder", "options": ["A"]},
            },
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_WINDOW"

    def test_create_empty_schema(self, api_client: APIClient):
        response = api_client.post(
            "/api/events",
            {
                "name": "Tower Launch",
                "startTime": "2026-01-10T10:00:00Z",
                "endTime": "2026-01-10T11:00:00Z",
                "selectionSchema": {"kind": "builder", "options": []},
            },
            format="json",
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SCHEMA"

    def test_create_malformed_body(self, api_client: APIClient):
        response = api_client.post("/api/events", {"name": "No times"}, format="json")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_list_events(self, api_client: APIClient):
        event = create_event()
        response = api_client.get("/api/events")
        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == [str(event.id)]


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{id}"""

    def test_get_event_returns_details(self, api_client: APIClient):
        event = create_event()
        with freeze_time(EVENT_START + timedelta(minutes=5)):
            response = api_client.get(f"/api/events/{event.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(event.id)
        assert data["windowState"] == "active"
        assert data["registrationCount"] == 0

    def test_window_state_after_end(self, api_client: APIClient):
        event = create_event()
        with freeze_time(EVENT_START + timedelta(hours=1)):
            response = api_client.get(f"/api/events/{event.id}")
        assert response.json()["windowState"] == "ended"

    def test_get_event_not_found(self, api_client: APIClient):
        response = api_client.get("/api/events/6f1c1e7a-1d2b-4c3d-9e8f-0a1b2c3d4e5f")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "EVENT_NOT_FOUND"

    def test_get_event_malformed_id(self, api_client: APIClient):
        response = api_client.get("/api/events/not-a-uuid")
        assert response.status_code == 404


@pytest.mark.django_db
class TestRegister:
    """Tests for POST /api/events/{id}/registrations"""

    def test_builder_scenario(self, api_client: APIClient, delay, django_capture_on_commit_callbacks):
        event = create_event()
        with freeze_time(EVENT_START + timedelta(minutes=10)):
            with django_capture_on_commit_callbacks(execute=True):
                first = post_registration(api_client, event.id, selection="A")
            with django_capture_on_commit_callbacks(execute=True):
                second = post_registration(api_client, event.id, selection="B")

        assert first.status_code == 200
        assert first.json()["status"] == "accepted"
        assert second.status_code == 200
        assert second.json()["status"] == "already_registered"
        assert second.json()["registration"]["selection"] == "A"
        assert Registration.objects.get(event_id=event.id.value).selection == "A"
        delay.assert_called_once_with(str(event.id), "9000000001")

        with freeze_time(EVENT_START + timedelta(hours=2)):
            late = post_registration(api_client, event.id, phoneNumber="9000000002")
        assert late.status_code == 409
        assert late.json()["error"] == {
            "code": "EVENT_NOT_ACTIVE",
            "message": "Registration is closed",
            "windowState": "ended",
        }
        assert Registration.objects.count() == 1

    def test_not_started(self, api_client: APIClient, delay):
        event = create_event()
        with freeze_time(EVENT_START - timedelta(minutes=1)):
            response = post_registration(api_client, event.id)
        assert response.status_code == 409
        assert response.json()["error"]["windowState"] == "not_started"
        delay.assert_not_called()

    def test_unknown_event(self, api_client: APIClient):
        response = post_registration(api_client, "6f1c1e7a-1d2b-4c3d-9e8f-0a1b2c3d4e5f")
        assert response.status_code == 404

    def test_blank_field(self, api_client: APIClient):
        event = create_event()
        with freeze_time(EVENT_START):
            response = post_registration(api_client, event.id, wing=" ")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "FIELD_REQUIRED"
        assert response.json()["error"]["field"] == "wing"

    def test_missing_field_counts_as_blank(self, api_client: APIClient):
        event = create_event()
        body = registration_body()
        del body["flatNo"]
        with freeze_time(EVENT_START):
            response = api_client.post(f"/api/events/{event.id}/registrations", body, format="json")
        assert response.json()["error"]["field"] == "flatNo"

    def test_invalid_phone(self, api_client: APIClient):
        event = create_event()
        with freeze_time(EVENT_START):
            response = post_registration(api_client, event.id, phoneNumber="12345")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PHONE_NUMBER"

    def test_trailing_newline_on_phone_does_not_register_twice(
        self, api_client: APIClient, delay, django_capture_on_commit_callbacks
    ):
        event = create_event()
        with freeze_time(EVENT_START):
            with django_capture_on_commit_callbacks(execute=True):
                first = post_registration(api_client, event.id, phoneNumber="9000000001")
            with django_capture_on_commit_callbacks(execute=True):
                second = post_registration(api_client, event.id, phoneNumber="9000000001\n")
        assert first.json()["status"] == "accepted"
        assert second.json()["status"] == "already_registered"
        assert second.json()["registration"]["phoneNumber"] == "9000000001"
        assert list(Registration.objects.values_list("phone_number", flat=True)) == ["9000000001"]
        delay.assert_called_once_with(str(event.id), "9000000001")

    def test_invalid_selection(self, api_client: APIClient):
        event = create_event()
        with freeze_time(EVENT_START):
            response = post_registration(api_client, event.id, selection="C")
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_SELECTION"
        assert Registration.objects.count() == 0

    def test_product_selection(self, api_client: APIClient, delay):
        event = create_event(kind="product", options=("1BHK", "2BHK", "3BHK"))
        with freeze_time(EVENT_START):
            response = post_registration(api_client, event.id, selection=["3BHK", "2BHK"])
        assert response.status_code == 200
        assert response.json()["registration"]["selection"] == ["2BHK", "3BHK"]

    def test_malformed_body(self, api_client: APIClient):
        event = create_event()
        response = post_registration(api_client, event.id, name={"first": "Asha"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_storage_failure_is_retryable(self, api_client: APIClient):
        from django.db import DatabaseError

        event = create_event()
        with freeze_time(EVENT_START), patch(
            "events.models.Registration.objects.create", side_effect=DatabaseError("disk full")
        ):
            response = post_registration(api_client, event.id)
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "STORAGE_ERROR"
        assert "disk full" not in response.content.decode()

    def test_list_registrations(self, api_client: APIClient, delay):
        event = create_event()
        with freeze_time(EVENT_START + timedelta(minutes=1)):
            post_registration(api_client, event.id, phoneNumber="9000000002")
        with freeze_time(EVENT_START + timedelta(minutes=2)):
            post_registration(api_client, event.id, phoneNumber="9000000001", attachmentRef="https://f.example.com/1")
        response = api_client.get(f"/api/events/{event.id}/registrations")
        assert response.status_code == 200
        data = response.json()
        assert [item["phoneNumber"] for item in data] == ["9000000002", "9000000001"]
        assert data[0]["attachmentRef"] is None
        assert data[1]["attachmentRef"] == "https://f.example.com/1"


@pytest.mark.django_db
class TestExport:
    """Tests for GET /api/events/{id}/export"""

    def test_empty_export(self, api_client: APIClient):
        event = create_event()
        response = api_client.get(f"/api/events/{event.id}/export")
        assert response.status_code == 204

    def test_export_not_found(self, api_client: APIClient):
        response = api_client.get("/api/events/6f1c1e7a-1d2b-4c3d-9e8f-0a1b2c3d4e5f/export")
        assert response.status_code == 404

    def test_export_csv(self, api_client: APIClient, delay):
        event = create_event(name="Tower  Launch")
        with freeze_time(EVENT_START + timedelta(minutes=20)):
            post_registration(api_client, event.id, phoneNumber="9000000002", selection="B")
        with freeze_time(EVENT_START + timedelta(minutes=10)):
            post_registration(api_client, event.id, phoneNumber="9000000001")

        with freeze_time("2026-01-11 06:00:00"):
            response = api_client.get(f"/api/events/{event.id}/export")

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/csv")
        assert response["Content-Disposition"] == 'attachment; filename="Tower_Launch_2026-01-11.csv"'
        rows = list(csv.reader(io.StringIO(response.content.decode())))
        assert rows[0] == [
            "Sr No",
            "Name",
            "Phone Number",
            "Flat No",
            "Wing",
            "Selection",
            "Attachment",
            "Registered At",
        ]
        assert rows[1] == ["1", "Asha Rao", "9000000001", "1204", "B", "A", "", "2026-01-10 15:40:00"]
        assert rows[2][0] == "2"
        assert rows[2][2] == "9000000002"
        assert len(rows) == 3

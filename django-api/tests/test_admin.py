"""Tests for the admin site restrictions.

Run with: pytest tests/test_admin.py -v
"""

from datetime import timedelta

import pytest

from events.models import Event
from events.services import EventService
from events.stores import DjangoEventStore
from tests.conftest import EVENT_START


@pytest.fixture
def event():
    service = EventService(DjangoEventStore(), base_url="https://register.example.com")
    return service.create("Tower Launch", EVENT_START, EVENT_START + timedelta(hours=1), "builder", ["A"])


@pytest.mark.django_db
class TestEventAdmin:
    def test_event_without_registrations_cannot_be_deleted(self, admin_client, event):
        response = admin_client.post(f"/admin/events/event/{event.id}/delete/", {"post": "yes"})
        assert response.status_code == 403
        assert Event.objects.filter(pk=event.id.value).exists()

    def test_events_cannot_be_added(self, admin_client):
        response = admin_client.get("/admin/events/event/add/")
        assert response.status_code == 403

    def test_changelist_is_available(self, admin_client, event):
        response = admin_client.get("/admin/events/event/")
        assert response.status_code == 200

"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta

import pytest
from rest_framework.test import APIClient

from events.domain import Event, Registration
from events.services import EventService, ExportService, RegistrationService
from events.stores import InMemoryEventStore, InMemoryRegistrationStore

EVENT_START = datetime(2026, 1, 10, 10, 0, tzinfo=UTC)
BASE_URL = "https://register.example.com"


class FakeClock:
    """Settable clock for services."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(EVENT_START - timedelta(days=1))


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def registration_store() -> InMemoryRegistrationStore:
    return InMemoryRegistrationStore()


@pytest.fixture
def event_service(event_store, clock) -> EventService:
    return EventService(event_store, base_url=BASE_URL, clock=clock)


@pytest.fixture
def accepted_calls() -> list[tuple[Registration, Event]]:
    return []


@pytest.fixture
def registration_service(event_service, registration_store, accepted_calls, clock) -> RegistrationService:
    return RegistrationService(
        event_service,
        registration_store,
        on_accepted=lambda registration, event: accepted_calls.append((registration, event)),
        clock=clock,
    )


@pytest.fixture
def export_service(event_service, registration_store, clock) -> ExportService:
    return ExportService(event_service, registration_store, clock=clock)


@pytest.fixture
def builder_event(event_service) -> Event:
    """Event with BuilderChoice(["A", "B"]) open for one hour from EVENT_START."""
    return event_service.create(
        name="Tower Launch",
        start_time=EVENT_START,
        end_time=EVENT_START + timedelta(hours=1),
        schema_kind="builder",
        options=["A", "B"],
    )


@pytest.fixture
def product_event(event_service) -> Event:
    """Event with ProductChoice over three products, open for one hour from EVENT_START."""
    return event_service.create(
        name="Product Fair",
        start_time=EVENT_START,
        end_time=EVENT_START + timedelta(hours=1),
        schema_kind="product",
        options=["1BHK", "2BHK", "3BHK"],
    )

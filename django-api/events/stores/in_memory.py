"""
In-memory store implementations.

Useful for testing and development. Not suitable for production
as all data is lost when the process terminates.
"""

import threading

from events.domain import Event, EventId, PhoneNumber, Registration
from events.stores.interfaces import EventStore, RegistrationStore


class InMemoryEventStore(EventStore):
    """Dictionary-backed event store."""

    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}
        self._lock = threading.Lock()

    def add_event(self, event: Event) -> None:
        with self._lock:
            self._events[event.id] = event

    def list_events(self) -> list[Event]:
        with self._lock:
            events = list(self._events.values())
        return sorted(events, key=lambda event: event.created_at, reverse=True)

    def get_event(self, event_id: EventId) -> Event | None:
        return self._events.get(event_id)

    def event_exists(self, event_id: EventId) -> bool:
        return event_id in self._events


class InMemoryRegistrationStore(RegistrationStore):
    """
    Dictionary-backed registration store.

    Thread-safety:
        The check-and-insert in create_if_absent runs under a single lock,
        so concurrent submissions for one key produce exactly one record.
    """

    def __init__(self) -> None:
        self._registrations: dict[EventId, dict[str, Registration]] = {}
        self._lock = threading.Lock()

    def create_if_absent(self, registration: Registration) -> tuple[Registration, bool]:
        with self._lock:
            namespace = self._registrations.setdefault(registration.event_id, {})
            existing = namespace.get(registration.phone_number.value)
            if existing is not None:
                return existing, False
            namespace[registration.phone_number.value] = registration
            return registration, True

    def get_registration(
        self, event_id: EventId, phone_number: PhoneNumber
    ) -> Registration | None:
        with self._lock:
            return self._registrations.get(event_id, {}).get(phone_number.value)

    def list_registrations(self, event_id: EventId) -> list[Registration]:
        with self._lock:
            registrations = list(self._registrations.get(event_id, {}).values())
        return sorted(registrations, key=lambda registration: registration.sort_key)

    def count_registrations(self, event_id: EventId) -> int:
        with self._lock:
            return len(self._registrations.get(event_id, {}))

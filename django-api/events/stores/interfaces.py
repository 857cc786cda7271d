"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from events.domain import Event, EventId, PhoneNumber, Registration


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def add_event(self, event: Event) -> None:
        """Persist a newly created event."""
        ...

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...


class RegistrationStore(ABC):
    """Interface for registration persistence operations."""

    @abstractmethod
    def create_if_absent(self, registration: Registration) -> tuple[Registration, bool]:
        """Insert the registration unless its (event_id, phone_number) key exists.

        The existence check and the insert form one atomic step.

        Returns:
            The stored registration and whether this call created it. When the
            key was taken, the stored registration is the existing record and
            nothing is written.

        Raises:
            StorageError: If the backing store fails.
        """
        ...

    @abstractmethod
    def get_registration(
        self, event_id: EventId, phone_number: PhoneNumber
    ) -> Registration | None:
        """Return a registration by key, or None if not found."""
        ...

    @abstractmethod
    def list_registrations(self, event_id: EventId) -> list[Registration]:
        """Return all registrations for an event, ordered by registered_at then phone number."""
        ...

    @abstractmethod
    def count_registrations(self, event_id: EventId) -> int:
        """Return the number of registrations for an event."""
        ...

"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import (
    EventId,
    PhoneNumber,
    Selection,
    SelectionSchema,
    WindowState,
)


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    start_time: datetime
    end_time: datetime
    selection_schema: SelectionSchema
    qr_link_target: str
    created_at: datetime

    def window_state(self, now: datetime) -> WindowState:
        """Locate ``now`` in the half-open window [start_time, end_time)."""
        if now < self.start_time:
            return WindowState.NOT_STARTED
        if now >= self.end_time:
            return WindowState.ENDED
        return WindowState.ACTIVE


@dataclass(frozen=True)
class Registration:
    """Domain representation of a Registration."""

    event_id: EventId
    phone_number: PhoneNumber
    name: str
    flat_no: str
    wing: str
    selection: Selection
    registered_at: datetime
    attachment_ref: str | None = None

    @property
    def sort_key(self) -> tuple[datetime, str]:
        return (self.registered_at, self.phone_number.value)


@dataclass(frozen=True)
class RegistrationOutcome:
    """Result of a registration attempt that passed validation."""

    registration: Registration

    accepted: bool = False


@dataclass(frozen=True)
class Accepted(RegistrationOutcome):
    """First writer for the key."""

    accepted: bool = True


@dataclass(frozen=True)
class AlreadyRegistered(RegistrationOutcome):
    """The key was already taken; ``registration`` is the stored record."""


@dataclass(frozen=True)
class ExportRow:
    """One row of an export, in column order."""

    sequence: int
    name: str
    phone_number: str
    flat_no: str
    wing: str
    selection: str
    attachment: str
    registered_at: str

    def as_tuple(self) -> tuple[object, ...]:
        return (
            self.sequence,
            self.name,
            self.phone_number,
            self.flat_no,
            self.wing,
            self.selection,
            self.attachment,
            self.registered_at,
        )


@dataclass(frozen=True)
class TabularSnapshot:
    """Flat snapshot of all registrations for an event."""

    event_id: EventId
    filename: str
    columns: tuple[str, ...]
    rows: tuple[ExportRow, ...]

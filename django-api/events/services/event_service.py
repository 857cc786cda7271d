"""Event service - event creation, lookup and window evaluation.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from collections.abc import Callable, Sequence
from datetime import datetime

import structlog
from django.utils import timezone

from events.domain import Event, EventId, SelectionSchema, WindowState
from events.domain.errors import (
    EventNotFoundError,
    FieldRequiredError,
    InvalidSchemaError,
    InvalidWindowError,
)
from events.stores.interfaces import EventStore

logger = structlog.get_logger(__name__)


def _aware(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value


class EventService:
    """Service for event registry operations."""

    def __init__(
        self,
        store: EventStore,
        base_url: str,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._base_url = base_url.rstrip("/")
        self._clock = clock

    def create(
        self,
        name: str,
        start_time: datetime,
        end_time: datetime,
        schema_kind: str,
        options: Sequence[str],
    ) -> Event:
        """Create and persist a new event.

        Raises:
            FieldRequiredError: If the name is blank.
            InvalidWindowError: If start_time is not before end_time.
            InvalidSchemaError: If the selection schema cannot be built.
        """
        if not name or not name.strip():
            raise FieldRequiredError("name")
        start_time, end_time = _aware(start_time), _aware(end_time)
        if start_time >= end_time:
            raise InvalidWindowError()
        try:
            schema = SelectionSchema.build(schema_kind, options)
        except ValueError as exc:
            raise InvalidSchemaError(str(exc)) from exc

        event_id = EventId.generate()
        event = Event(
            id=event_id,
            name=name.strip(),
            start_time=start_time,
            end_time=end_time,
            selection_schema=schema,
            qr_link_target=self.qr_link_target(event_id),
            created_at=self._clock(),
        )
        self._store.add_event(event)
        logger.info(
            "event_created",
            event_id=str(event_id),
            selection_kind=schema.kind,
            option_count=len(schema.options),
        )
        return event

    def qr_link_target(self, event_id: EventId) -> str:
        """Public registration URL encoded into the event's QR code."""
        return f"{self._base_url}/events/{event_id}"

    def list_events(self) -> list[Event]:
        """Return all events."""
        return self._store.list_events()

    def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            EventNotFoundError: If the ID is malformed or the event does not exist.
        """
        try:
            parsed = EventId.from_string(event_id)
        except (ValueError, TypeError, AttributeError) as exc:
            raise EventNotFoundError(str(event_id)) from exc
        event = self._store.get_event(parsed)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def window_state(self, event: Event, now: datetime | None = None) -> WindowState:
        """Window state of ``event`` at ``now`` (defaults to the service clock)."""
        return event.window_state(now if now is not None else self._clock())

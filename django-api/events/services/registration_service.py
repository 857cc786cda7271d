"""Registration service - the only write path for registrations.

Every rule that decides whether a submission is accepted lives here. The
store's create_if_absent is the single atomic step; everything before it is
validation that touches no state.
"""

from collections.abc import Callable
from datetime import datetime

import structlog
from django.utils import timezone

from events.domain import (
    Accepted,
    AlreadyRegistered,
    Event,
    PhoneNumber,
    Registration,
    RegistrationOutcome,
    WindowState,
)
from events.domain.errors import (
    EventNotActiveError,
    FieldRequiredError,
    InvalidPhoneNumberError,
    InvalidSelectionError,
)
from events.services.event_service import EventService
from events.stores.interfaces import RegistrationStore

logger = structlog.get_logger(__name__)

AcceptedCallback = Callable[[Registration, Event], None]


def _required(field: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise FieldRequiredError(field)
    return value.strip()


class RegistrationService:
    """Service for accepting, deduplicating and listing registrations."""

    def __init__(
        self,
        events: EventService,
        store: RegistrationStore,
        on_accepted: AcceptedCallback | None = None,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._events = events
        self._store = store
        self._on_accepted = on_accepted
        self._clock = clock

    def register(
        self,
        event_id: str,
        phone_number: str,
        name: str,
        flat_no: str,
        wing: str,
        selection: object,
        attachment_ref: str | None = None,
    ) -> RegistrationOutcome:
        """Accept a registration, or return the one already stored for the phone number.

        Safe to retry: repeated calls for the same (event_id, phone_number)
        converge on a single stored registration and a single notification.

        Raises:
            EventNotFoundError: If the event does not exist.
            EventNotActiveError: If the event window is not open.
            FieldRequiredError: If name, flat number or wing is blank.
            InvalidPhoneNumberError: If the phone number is not 10 digits.
            InvalidSelectionError: If the selection does not fit the event schema.
            StorageError: If the store fails; nothing was written.
        """
        event = self._events.get_event(event_id)
        now = self._clock()
        state = event.window_state(now)
        if state is not WindowState.ACTIVE:
            logger.info("registration_rejected_window", event_id=event_id, window_state=state.value)
            raise EventNotActiveError(event_id, state)

        name = _required("name", name)
        flat_no = _required("flatNo", flat_no)
        wing = _required("wing", wing)
        try:
            phone = PhoneNumber(phone_number.strip())
        except ValueError as exc:
            raise InvalidPhoneNumberError() from exc
        try:
            chosen = event.selection_schema.coerce(selection)
        except ValueError as exc:
            raise InvalidSelectionError(str(exc)) from exc

        registration = Registration(
            event_id=event.id,
            phone_number=phone,
            name=name,
            flat_no=flat_no,
            wing=wing,
            selection=chosen,
            registered_at=now,
            attachment_ref=attachment_ref or None,
        )
        stored, created = self._store.create_if_absent(registration)
        if not created:
            logger.info("registration_duplicate", event_id=event_id, phone_number=phone.value)
            return AlreadyRegistered(registration=stored)

        logger.info("registration_accepted", event_id=event_id, phone_number=phone.value)
        if self._on_accepted is not None:
            try:
                self._on_accepted(stored, event)
            except Exception:
                logger.exception(
                    "registration_notification_schedule_failed",
                    event_id=event_id,
                    phone_number=phone.value,
                )
        return Accepted(registration=stored)

    def list_registrations(self, event_id: str) -> list[Registration]:
        """Return registrations for an event, oldest first.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._events.get_event(event_id)
        return self._store.list_registrations(event.id)

    def registration_count(self, event_id: str) -> int:
        """Return how many people registered for an event.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        event = self._events.get_event(event_id)
        return self._store.count_registrations(event.id)

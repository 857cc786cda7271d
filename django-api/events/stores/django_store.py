"""Django ORM implementation of the event and registration stores."""

import structlog
from django.db import DatabaseError, IntegrityError, transaction

from events import models
from events.domain import (
    Event,
    EventId,
    PhoneNumber,
    Registration,
    Selection,
    SelectionSchema,
)
from events.domain.errors import StorageError
from events.stores.interfaces import EventStore, RegistrationStore

logger = structlog.get_logger(__name__)


def _event_to_domain(row: models.Event) -> Event:
    return Event(
        id=EventId(value=row.id),
        name=row.name,
        start_time=row.start_time,
        end_time=row.end_time,
        selection_schema=SelectionSchema.build(row.selection_kind, row.selection_options),
        qr_link_target=row.qr_link_target,
        created_at=row.created_at,
    )


def _selection_to_domain(value: str | list[str]) -> Selection:
    return value if isinstance(value, str) else tuple(value)


def _registration_to_domain(row: models.Registration) -> Registration:
    return Registration(
        event_id=EventId(value=row.event_id),
        phone_number=PhoneNumber(row.phone_number),
        name=row.name,
        flat_no=row.flat_no,
        wing=row.wing,
        selection=_selection_to_domain(row.selection),
        registered_at=row.registered_at,
        attachment_ref=row.attachment_ref or None,
    )


class DjangoEventStore(EventStore):
    """Database-backed event store using Django ORM."""

    def add_event(self, event: Event) -> None:
        try:
            models.Event.objects.create(
                id=event.id.value,
                name=event.name,
                start_time=event.start_time,
                end_time=event.end_time,
                selection_kind=event.selection_schema.kind,
                selection_options=list(event.selection_schema.options),
                qr_link_target=event.qr_link_target,
                created_at=event.created_at,
            )
        except DatabaseError as exc:
            logger.error("event_store_write_failed", event_id=str(event.id), error=str(exc))
            raise StorageError() from exc

    def list_events(self) -> list[Event]:
        try:
            return [_event_to_domain(row) for row in models.Event.objects.all()]
        except DatabaseError as exc:
            raise StorageError() from exc

    def get_event(self, event_id: EventId) -> Event | None:
        try:
            row = models.Event.objects.filter(pk=event_id.value).first()
        except DatabaseError as exc:
            raise StorageError() from exc
        return _event_to_domain(row) if row is not None else None

    def event_exists(self, event_id: EventId) -> bool:
        try:
            return models.Event.objects.filter(pk=event_id.value).exists()
        except DatabaseError as exc:
            raise StorageError() from exc


class DjangoRegistrationStore(RegistrationStore):
    """Database-backed registration store.

    create_if_absent relies on the (event, phone_number) unique constraint:
    the INSERT either succeeds or fails with IntegrityError, so two racing
    submissions can never both create a row.
    """

    def create_if_absent(self, registration: Registration) -> tuple[Registration, bool]:
        selection = registration.selection
        try:
            with transaction.atomic():
                row = models.Registration.objects.create(
                    event_id=registration.event_id.value,
                    phone_number=registration.phone_number.value,
                    name=registration.name,
                    flat_no=registration.flat_no,
                    wing=registration.wing,
                    selection=selection if isinstance(selection, str) else list(selection),
                    attachment_ref=registration.attachment_ref,
                    registered_at=registration.registered_at,
                )
        except IntegrityError:
            existing = self.get_registration(registration.event_id, registration.phone_number)
            if existing is None:
                logger.error(
                    "registration_conflict_without_record",
                    event_id=str(registration.event_id),
                    phone_number=registration.phone_number.value,
                )
                raise StorageError()
            return existing, False
        except DatabaseError as exc:
            logger.error(
                "registration_store_write_failed",
                event_id=str(registration.event_id),
                error=str(exc),
            )
            raise StorageError() from exc
        return _registration_to_domain(row), True

    def get_registration(
        self, event_id: EventId, phone_number: PhoneNumber
    ) -> Registration | None:
        try:
            row = models.Registration.objects.filter(
                event_id=event_id.value, phone_number=phone_number.value
            ).first()
        except DatabaseError as exc:
            raise StorageError() from exc
        return _registration_to_domain(row) if row is not None else None

    def list_registrations(self, event_id: EventId) -> list[Registration]:
        try:
            rows = models.Registration.objects.filter(event_id=event_id.value).order_by(
                "registered_at", "phone_number"
            )
            return [_registration_to_domain(row) for row in rows]
        except DatabaseError as exc:
            raise StorageError() from exc

    def count_registrations(self, event_id: EventId) -> int:
        try:
            return models.Registration.objects.filter(event_id=event_id.value).count()
        except DatabaseError as exc:
            raise StorageError() from exc

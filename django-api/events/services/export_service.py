"""Export service - flat snapshot of an event's registrations."""

import re
from collections.abc import Callable
from datetime import date, datetime

import structlog
from django.utils import timezone

from events.domain import Event, ExportRow, Registration, TabularSnapshot
from events.domain.errors import EmptyExportError
from events.services.event_service import EventService
from events.stores.interfaces import RegistrationStore

logger = structlog.get_logger(__name__)

EXPORT_COLUMNS = (
    "Sr No",
    "Name",
    "Phone Number",
    "Flat No",
    "Wing",
    "Selection",
    "Attachment",
    "Registered At",
)
REGISTERED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\-]")
_REPEATED_SEPARATORS = re.compile(r"_{2,}")


def export_filename(event_name: str, export_date: date) -> str:
    """Build ``{event-name}_{yyyy-mm-dd}`` with only filesystem-safe characters."""
    base = _WHITESPACE.sub("_", event_name.strip())
    base = _UNSAFE_FILENAME_CHARS.sub("", base)
    base = _REPEATED_SEPARATORS.sub("_", base).strip("_-") or "event"
    return f"{base}_{export_date:%Y-%m-%d}"


class ExportService:
    """Service for exporting registrations. Read only."""

    def __init__(
        self,
        events: EventService,
        store: RegistrationStore,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._events = events
        self._store = store
        self._clock = clock

    def export(self, event_id: str) -> TabularSnapshot:
        """Snapshot all registrations for an event.

        Raises:
            EventNotFoundError: If the event does not exist.
            EmptyExportError: If the event has no registrations.
        """
        event = self._events.get_event(event_id)
        registrations = sorted(self._store.list_registrations(event.id), key=lambda r: r.sort_key)
        if not registrations:
            logger.info("export_empty", event_id=event_id)
            raise EmptyExportError(event_id)

        rows = tuple(
            self._row(sequence, registration, event)
            for sequence, registration in enumerate(registrations, start=1)
        )
        filename = export_filename(event.name, timezone.localdate(self._clock()))
        logger.info("export_created", event_id=event_id, row_count=len(rows), filename=filename)
        return TabularSnapshot(
            event_id=event.id,
            filename=filename,
            columns=EXPORT_COLUMNS,
            rows=rows,
        )

    @staticmethod
    def _row(sequence: int, registration: Registration, event: Event) -> ExportRow:
        return ExportRow(
            sequence=sequence,
            name=registration.name,
            phone_number=registration.phone_number.value,
            flat_no=registration.flat_no,
            wing=registration.wing,
            selection=event.selection_schema.render(registration.selection),
            attachment=registration.attachment_ref or "",
            registered_at=timezone.localtime(registration.registered_at).strftime(
                REGISTERED_AT_FORMAT
            ),
        )

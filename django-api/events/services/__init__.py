from django.conf import settings

from events.services.event_service import EventService
from events.services.export_service import ExportService
from events.services.notification_service import NotificationDispatcher, schedule_notification
from events.services.registration_service import RegistrationService
from events.stores import DjangoEventStore, DjangoRegistrationStore

__all__ = [
    "EventService",
    "ExportService",
    "NotificationDispatcher",
    "RegistrationService",
    "get_event_service",
    "get_export_service",
    "get_registration_service",
]


def get_event_service() -> EventService:
    return EventService(DjangoEventStore(), base_url=settings.REGISTRATION_BASE_URL)


def get_registration_service() -> RegistrationService:
    return RegistrationService(
        get_event_service(),
        DjangoRegistrationStore(),
        on_accepted=schedule_notification,
    )


def get_export_service() -> ExportService:
    return ExportService(get_event_service(), DjangoRegistrationStore())

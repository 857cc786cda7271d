"""Celery tasks for registration side effects."""

import httpx
import structlog
from celery import Task, shared_task

from events.domain import PhoneNumber
from events.domain.errors import EventNotFoundError

logger = structlog.get_logger(__name__)


@shared_task(name="events.send_registration_notification", bind=True)
def send_registration_notification(self: Task, event_id: str, phone_number: str) -> bool:
    """Send the thank-you notification for an accepted registration.

    A failed send is retried up to ``NOTIFICATION_MAX_ATTEMPTS`` attempts in
    total, waiting ``NOTIFICATION_BACKOFF_SECONDS * 2 ** (attempt - 1)`` between
    them. When the last attempt fails the dispatcher reports it and the task
    returns False instead of raising.

    Args:
        self: Celery task instance (bound task).
        event_id: The UUID of the event.
        phone_number: The registration's phone number.

    Returns:
        Whether the notification was delivered.
    """
    from events.services import NotificationDispatcher, get_event_service
    from events.stores import DjangoRegistrationStore

    try:
        event = get_event_service().get_event(event_id)
    except EventNotFoundError:
        logger.error("notification_event_missing", event_id=event_id)
        return False

    registration = DjangoRegistrationStore().get_registration(event.id, PhoneNumber(phone_number))
    if registration is None:
        logger.error("notification_registration_missing", event_id=event_id, phone_number=phone_number)
        return False

    dispatcher = NotificationDispatcher.from_settings()
    attempt = self.request.retries + 1
    try:
        return dispatcher.notify(registration, event)
    except httpx.HTTPError as exc:
        if attempt >= dispatcher.max_attempts:
            dispatcher.report_failure(registration, event, exc, attempts=attempt)
            return False
        logger.warning(
            "notification_attempt_failed",
            event_id=event_id,
            phone_number=phone_number,
            attempt=attempt,
            max_attempts=dispatcher.max_attempts,
            error=str(exc) or exc.__class__.__name__,
        )
        raise self.retry(
            exc=exc,
            countdown=dispatcher.retry_delay(attempt),
            max_retries=dispatcher.max_attempts - 1,
        )

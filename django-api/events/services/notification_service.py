"""Outbound "thank you" notification for accepted registrations.

Dispatch is best effort. The Celery task retries a failed send a bounded number
of times with exponential backoff. Once retries run out the failure is logged
and broadcast on the ``notification_failed`` signal. It never reaches the
registrant and never touches stored state.
"""

from typing import Any

import httpx
import structlog
from django.conf import settings
from django.db import transaction

from events.domain import Event, Registration
from events.signals import notification_failed

logger = structlog.get_logger(__name__)


def normalize_recipient(phone_number: str, country_code: str) -> str:
    """Return the phone number with the country prefix, digits only."""
    digits = "".join(ch for ch in phone_number if ch.isdigit())
    if len(digits) == 10:
        return f"{country_code}{digits}"
    return digits


class NotificationDispatcher:
    """Sends the templated message for one registration."""

    def __init__(
        self,
        api_url: str,
        api_token: str,
        template: str = "thankyou",
        country_code: str = "91",
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._api_url = api_url
        self._api_token = api_token
        self._template = template
        self._country_code = country_code
        self.max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._timeout_seconds = timeout_seconds
        self._client = client

    @classmethod
    def from_settings(cls, **overrides: Any) -> "NotificationDispatcher":
        options: dict[str, Any] = {
            "api_url": settings.NOTIFICATION_API_URL,
            "api_token": settings.NOTIFICATION_API_TOKEN,
            "template": settings.NOTIFICATION_TEMPLATE,
            "country_code": settings.NOTIFICATION_COUNTRY_CODE,
            "max_attempts": settings.NOTIFICATION_MAX_ATTEMPTS,
            "backoff_seconds": settings.NOTIFICATION_BACKOFF_SECONDS,
            "timeout_seconds": settings.NOTIFICATION_TIMEOUT_SECONDS,
        }
        options.update(overrides)
        return cls(**options)

    def build_payload(self, registration: Registration, event: Event) -> dict[str, Any]:
        return {
            "recipient": normalize_recipient(registration.phone_number.value, self._country_code),
            "template": self._template,
            "params": [
                registration.name,
                event.name,
                event.selection_schema.render(registration.selection),
            ],
        }

    def retry_delay(self, attempt: int) -> float:
        """Seconds to wait after the given failed attempt (1-based)."""
        return self._backoff_seconds * 2 ** (attempt - 1)

    def notify(self, registration: Registration, event: Event) -> bool:
        """Make one delivery attempt.

        Returns:
            True once delivered, False when sending is disabled.

        Raises:
            httpx.HTTPError: If the attempt failed and may be retried.
        """
        log = logger.bind(
            event_id=str(event.id),
            phone_number=registration.phone_number.value,
        )
        if not self._api_token:
            log.warning("notification_skipped", reason="missing_api_token")
            return False

        self._send(self.build_payload(registration, event))
        log.info("notification_sent")
        return True

    def report_failure(
        self, registration: Registration, event: Event, error: Exception, attempts: int
    ) -> None:
        """Log the final failure and broadcast it on ``notification_failed``."""
        message = str(error) or error.__class__.__name__
        logger.error(
            "registration_notification_failed",
            event_id=str(event.id),
            phone_number=registration.phone_number.value,
            attempts=attempts,
            error=message,
        )
        notification_failed.send(
            sender=self.__class__,
            registration=registration,
            event=event,
            error=message,
        )

    def _send(self, payload: dict[str, Any]) -> None:
        headers = {"Authorization": f"Bearer {self._api_token}"}
        if self._client is not None:
            response = self._client.post(self._api_url, json=payload, headers=headers)
            response.raise_for_status()
            return
        with httpx.Client(timeout=httpx.Timeout(self._timeout_seconds)) as client:
            response = client.post(self._api_url, json=payload, headers=headers)
            response.raise_for_status()


def schedule_notification(registration: Registration, event: Event) -> None:
    """Queue the notification task once the registration has been committed."""

    def send_notification() -> None:
        from events.tasks import send_registration_notification

        send_registration_notification.delay(str(event.id), registration.phone_number.value)

    transaction.on_commit(send_notification, robust=True)

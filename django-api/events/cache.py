"""Cache keys and timeouts for the events app."""

from django.conf import settings


def registration_count_key(event_id: str) -> str:
    return f"events:{event_id}:registration_count"


def event_detail_key(event_id: str) -> str:
    return f"events:{event_id}"


def registration_count_timeout() -> int:
    return settings.REGISTRATION_COUNT_CACHE_TIMEOUT

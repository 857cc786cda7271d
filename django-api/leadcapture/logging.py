"""Structlog configuration for Lead Capture.

Registrant phone numbers end up in most log lines; they are masked to their
last four digits before rendering.
"""

import logging
import typing as t

import structlog

PHONE_KEYS = ("phone_number", "recipient")
SENSITIVE_KEYS = ("token", "authorization", "secret", "password", "api_key")


def mask_phone_numbers(logger: t.Any, method_name: str, event_dict: dict[str, t.Any]) -> dict[str, t.Any]:
    """Replace all but the last four digits of phone-like values with '*'."""
    for key in PHONE_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str) and len(value) > 4:
            event_dict[key] = "*" * (len(value) - 4) + value[-4:]
    return event_dict


def redact_secrets(logger: t.Any, method_name: str, event_dict: dict[str, t.Any]) -> dict[str, t.Any]:
    """Redact credential-like keys."""
    for key in list(event_dict.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            event_dict[key] = "[REDACTED]"
    return event_dict


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    renderer: t.Any = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            mask_phone_numbers,
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

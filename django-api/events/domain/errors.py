"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum

from events.domain.value_objects import WindowState


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_NOT_ACTIVE = "EVENT_NOT_ACTIVE"
    FIELD_REQUIRED = "FIELD_REQUIRED"
    INVALID_PHONE_NUMBER = "INVALID_PHONE_NUMBER"
    INVALID_SELECTION = "INVALID_SELECTION"
    INVALID_WINDOW = "INVALID_WINDOW"
    INVALID_SCHEMA = "INVALID_SCHEMA"
    EMPTY_RESULT = "EMPTY_RESULT"
    STORAGE_ERROR = "STORAGE_ERROR"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    @property
    def details(self) -> dict[str, str]:
        """Extra user-safe context for the caller."""
        return {}


class ValidationError(DomainError):
    """Field-level error the registrant can correct."""


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class EventNotActiveError(DomainError):
    """Raised when a registration arrives outside the event window."""

    def __init__(self, event_id: str, window_state: WindowState) -> None:
        if window_state is WindowState.NOT_STARTED:
            message = "Registration has not opened yet"
        else:
            message = "Registration is closed"
        super().__init__(code=ErrorCode.EVENT_NOT_ACTIVE, message=message)
        self.event_id = event_id
        self.window_state = window_state

    @property
    def details(self) -> dict[str, str]:
        return {"windowState": self.window_state.value}


class FieldRequiredError(ValidationError):
    """Raised when a required text field is blank."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.FIELD_REQUIRED,
            message=f"{field} is required",
        )
        self.field = field

    @property
    def details(self) -> dict[str, str]:
        return {"field": self.field}


class InvalidPhoneNumberError(ValidationError):
    """Raised when a phone number is not exactly ten digits."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PHONE_NUMBER,
            message="Enter a valid 10 digit phone number",
        )


class InvalidSelectionError(ValidationError):
    """Raised when a selection does not fit the event's selection schema."""

    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SELECTION, message=reason)


class InvalidWindowError(ValidationError):
    """Raised when an event would end before it starts."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_WINDOW,
            message="Event start time must be before its end time",
        )


class InvalidSchemaError(ValidationError):
    """Raised when a selection schema cannot be built."""

    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_SCHEMA, message=reason)


class EmptyExportError(DomainError):
    """Raised when an export finds no registrations. Not fatal."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_RESULT,
            message="No registrations found for this event",
        )
        self.event_id = event_id


class StorageError(DomainError):
    """Raised when the backing store fails. Safe to retry."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORAGE_ERROR,
            message="Temporary storage failure, please retry",
        )

from events.domain.models import (
    Accepted,
    AlreadyRegistered,
    Event,
    ExportRow,
    Registration,
    RegistrationOutcome,
    TabularSnapshot,
)
from events.domain.value_objects import (
    BuilderChoice,
    EventId,
    PhoneNumber,
    ProductChoice,
    Selection,
    SelectionSchema,
    WindowState,
)

__all__ = [
    "Event",
    "Registration",
    "RegistrationOutcome",
    "Accepted",
    "AlreadyRegistered",
    "ExportRow",
    "TabularSnapshot",
    "EventId",
    "PhoneNumber",
    "Selection",
    "SelectionSchema",
    "BuilderChoice",
    "ProductChoice",
    "WindowState",
]

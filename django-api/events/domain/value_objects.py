"""Domain primitives that enforce validity at creation time."""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Self
from uuid import UUID, uuid4

PHONE_NUMBER_PATTERN = re.compile(r"[0-9]{10}")

Selection = str | tuple[str, ...]


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def generate(cls) -> Self:
        return cls(value=uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PhoneNumber:
    """Ten digit phone number, the dedup key inside one event."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not PHONE_NUMBER_PATTERN.fullmatch(self.value):
            raise ValueError("Phone number must be exactly 10 digits")

    def __str__(self) -> str:
        return self.value


class WindowState(Enum):
    """Where a point in time falls relative to an event window."""

    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"


def _ordered_options(options: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for option in options:
        if not isinstance(option, str) or not option.strip():
            raise ValueError("Options must be non-blank strings")
        seen.setdefault(option.strip(), None)
    if not seen:
        raise ValueError("At least one option is required")
    return tuple(seen)


@dataclass(frozen=True)
class SelectionSchema:
    """What a registrant may pick. Immutable once attached to an event."""

    options: tuple[str, ...]

    kind: ClassVar[str] = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", _ordered_options(self.options))

    @classmethod
    def build(cls, kind: str, options: Sequence[str]) -> "SelectionSchema":
        """Build the schema variant named by ``kind``.

        Raises:
            ValueError: If the kind is unknown or the options are unusable.
        """
        for variant in (BuilderChoice, ProductChoice):
            if variant.kind == kind:
                if isinstance(options, str):
                    raise ValueError("Options must be a list of strings")
                return variant(options=tuple(options))
        raise ValueError(f"Unknown selection schema kind: {kind!r}")

    def coerce(self, selection: object) -> Selection:
        """Validate a raw selection and return its canonical form."""
        raise NotImplementedError

    def render(self, selection: Selection) -> str:
        """Single choice as-is, multiple choices comma-joined."""
        return selection if isinstance(selection, str) else ", ".join(selection)

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind, "options": list(self.options)}


@dataclass(frozen=True)
class BuilderChoice(SelectionSchema):
    """Exactly one option."""

    kind: ClassVar[str] = "builder"

    def coerce(self, selection: object) -> Selection:
        if not isinstance(selection, str):
            raise ValueError("Select exactly one option")
        choice = selection.strip()
        if choice not in self.options:
            raise ValueError(f"{choice!r} is not an available option")
        return choice


@dataclass(frozen=True)
class ProductChoice(SelectionSchema):
    """Any non-empty subset of the options."""

    kind: ClassVar[str] = "product"

    def coerce(self, selection: object) -> Selection:
        if isinstance(selection, str) or not isinstance(selection, (list, tuple, set, frozenset)):
            raise ValueError("Select one or more options")
        chosen = set()
        for item in selection:
            if not isinstance(item, str):
                raise ValueError("Options must be strings")
            if item.strip() not in self.options:
                raise ValueError(f"{item.strip()!r} is not an available option")
            chosen.add(item.strip())
        if not chosen:
            raise ValueError("Select one or more options")
        return tuple(option for option in self.options if option in chosen)

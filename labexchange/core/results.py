"""Tagged results for sanitization and validation."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FieldError:
    """A problem with a single form field, reported inline next to it."""

    field: str
    message: str


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    errors: list[FieldError] = field(default_factory=list)

    def for_field(self, name: str) -> list[str]:
        """Messages attached to one field, in reporting order."""
        return [error.message for error in self.errors if error.field == name]

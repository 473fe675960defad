"""Enums for equipment listing fields."""

from enum import StrEnum


class Condition(StrEnum):
    """Physical condition of a listed instrument, best first."""

    NEW = "new"
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class AvailabilityStatus(StrEnum):
    """Public visibility of a listing."""

    AVAILABLE = "available"
    SOLD = "sold"

    def is_public(self) -> bool:
        """Only available listings appear in the browse view."""
        return self == AvailabilityStatus.AVAILABLE


class CertificationStatus(StrEnum):
    """Certification state, set by the marketplace rather than the seller."""

    CERTIFIED = "certified"
    UNCERTIFIED = "uncertified"

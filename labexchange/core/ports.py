"""Capability interfaces the listing lifecycle consumes.

The backend (auth, persistence, row-level authorization) is reached only
through these protocols. ``labexchange.client.http`` implements them over the
REST API; tests implement them in memory.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from labexchange.models.enums import AvailabilityStatus
from labexchange.schemas.equipment import EquipmentResponse as Listing
from labexchange.schemas.equipment import SellerContact
from labexchange.schemas.profile import ProfileLookup, ProfileResponse

__all__ = [
    "AuthBackend",
    "Direction",
    "EquipmentStore",
    "Listing",
    "ListingQuery",
    "Navigator",
    "Notifier",
    "Order",
    "ProfileStore",
    "Session",
    "SessionListener",
    "SessionSource",
    "SessionState",
    "SessionUser",
]


@dataclass(frozen=True)
class SessionUser:
    id: int
    email: str


@dataclass(frozen=True)
class Session:
    """Authenticated identity context of the current client."""

    user: SessionUser
    access_token: str


SessionListener = Callable[[Session | None], Any]


class SessionState(StrEnum):
    """Resolution state of the current session."""

    UNKNOWN = "unknown"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class Direction(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ListingQuery:
    """Equality filters for a listing read; None means unfiltered."""

    availability_status: AvailabilityStatus | None = None
    owner_id: int | None = None


@dataclass(frozen=True)
class Order:
    field: str = "created_at"
    direction: Direction = Direction.DESC


class AuthBackend(Protocol):
    """Issues and validates sessions."""

    async def sign_in(self, email: str, password: str) -> Session: ...

    async def resolve(self, access_token: str) -> Session | None: ...

    async def sign_out(self, session: Session) -> None: ...


class EquipmentStore(Protocol):
    """Listing records, authorized by the backend for the calling session."""

    async def list(self, query: ListingQuery, order: Order) -> Sequence[Listing]: ...

    async def get(self, listing_id: int) -> Listing: ...

    async def insert(self, record: dict[str, Any]) -> Listing: ...

    async def update(self, listing_id: int, fields: dict[str, Any]) -> Listing: ...

    async def delete(self, listing_id: int) -> None: ...

    async def contact(self, listing_id: int) -> SellerContact: ...


class ProfileStore(Protocol):
    async def get(self, user_id: int) -> ProfileLookup: ...

    async def update(self, user_id: int, fields: dict[str, Any]) -> ProfileResponse: ...


class Navigator(Protocol):
    def navigate(self, path: str) -> None: ...


class Notifier(Protocol):
    def notify(self, title: str, description: str, variant: str = "default") -> None: ...


class SessionSource(Protocol):
    """Read side of the session provider, plus the sign-out it routes."""

    @property
    def state(self) -> SessionState: ...

    def get_session(self) -> Session | None: ...

    def on_change(self, callback: SessionListener) -> Callable[[], None]: ...

    async def sign_out(self) -> None: ...

"""HTTP adapters implementing the lifecycle ports against the REST API."""

import logging
from collections.abc import Callable, Sequence
from typing import Any

import httpx

from labexchange.config import get_settings
from labexchange.core.errors import (
    AuthenticationRequired,
    NotFound,
    StoreError,
    Unauthorized,
    ValidationError,
)
from labexchange.core.ports import Listing, ListingQuery, Order, Session, SessionUser
from labexchange.core.results import FieldError
from labexchange.schemas.equipment import SellerContact
from labexchange.schemas.profile import ProfileLookup, ProfileResponse

logger = logging.getLogger(__name__)

TokenSource = Callable[[], str | None]


def _detail(response: httpx.Response) -> Any:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict):
        return data.get("detail", response.text)
    return response.text


def raise_for_status(response: httpx.Response) -> None:
    """Translate an error response into the lifecycle error taxonomy."""
    if response.is_success:
        return
    detail = _detail(response)
    code = response.status_code
    if code == httpx.codes.UNPROCESSABLE_ENTITY and isinstance(detail, list):
        raise ValidationError(
            [
                FieldError(str(error.get("loc", ["body", "__all__"])[-1]), error.get("msg", ""))
                for error in detail
            ]
        )
    message = detail if isinstance(detail, str) else str(detail)
    if code == httpx.codes.UNAUTHORIZED:
        raise AuthenticationRequired(message)
    if code == httpx.codes.FORBIDDEN:
        raise Unauthorized(message)
    if code == httpx.codes.NOT_FOUND:
        raise NotFound(message)
    raise StoreError(message)


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` that adds the bearer token.

    Pass an existing ``http`` client to share a connection pool, or to point
    the adapters at an in-process ASGI app. The default client has no timeout;
    a call fails only when the connection or the server rejects it.
    """

    def __init__(
        self,
        base_url: str | None = None,
        http: httpx.AsyncClient | None = None,
        token: TokenSource | None = None,
    ) -> None:
        settings = get_settings()
        self.http = http or httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=None,
        )
        self._token = token or (lambda: None)

    def with_token(self, token: TokenSource) -> "ApiClient":
        return ApiClient(http=self.http, token=token)

    async def request(
        self,
        method: str,
        url: str,
        *,
        access_token: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        token = access_token or self._token()
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            response = await self.http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling {method} {url}: {e}")
            raise StoreError(str(e) or "Network error") from e
        raise_for_status(response)
        return response

    async def aclose(self) -> None:
        await self.http.aclose()


def _session(data: dict[str, Any], access_token: str) -> Session:
    return Session(user=SessionUser(id=data["id"], email=data["email"]), access_token=access_token)


class HttpAuthBackend:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def sign_in(self, email: str, password: str) -> Session:
        response = await self.api.request(
            "POST", "/api/v1/auth/login", json={"email": email, "password": password}
        )
        data = response.json()
        return _session(data["user"], data["access_token"])

    async def register(self, email: str, password: str) -> Session:
        response = await self.api.request(
            "POST", "/api/v1/auth/register", json={"email": email, "password": password}
        )
        data = response.json()
        return _session(data["user"], data["access_token"])

    async def resolve(self, access_token: str) -> Session | None:
        """Resolve a stored token; an expired or revoked token is no session."""
        try:
            response = await self.api.request(
                "GET", "/api/v1/auth/me", access_token=access_token
            )
        except AuthenticationRequired:
            return None
        return _session(response.json(), access_token)

    async def sign_out(self, session: Session) -> None:
        await self.api.request("POST", "/api/v1/auth/logout", access_token=session.access_token)


class HttpEquipmentStore:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def list(self, query: ListingQuery, order: Order) -> Sequence[Listing]:
        params: dict[str, Any] = {"order_by": order.field, "direction": order.direction.value}
        if query.availability_status is not None:
            params["availability_status"] = query.availability_status.value
        if query.owner_id is not None:
            params["owner_id"] = query.owner_id
        response = await self.api.request("GET", "/api/v1/equipment", params=params)
        return [Listing.model_validate(item) for item in response.json()]

    async def get(self, listing_id: int) -> Listing:
        response = await self.api.request("GET", f"/api/v1/equipment/{listing_id}")
        return Listing.model_validate(response.json())

    async def insert(self, record: dict[str, Any]) -> Listing:
        # Ownership and status are bound by the server from the token
        response = await self.api.request("POST", "/api/v1/equipment", json=record)
        return Listing.model_validate(response.json())

    async def update(self, listing_id: int, fields: dict[str, Any]) -> Listing:
        response = await self.api.request(
            "PATCH", f"/api/v1/equipment/{listing_id}", json=fields
        )
        return Listing.model_validate(response.json())

    async def delete(self, listing_id: int) -> None:
        await self.api.request("DELETE", f"/api/v1/equipment/{listing_id}")

    async def contact(self, listing_id: int) -> SellerContact:
        response = await self.api.request("POST", f"/api/v1/equipment/{listing_id}/contact")
        return SellerContact.model_validate(response.json())


class HttpProfileStore:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def get(self, user_id: int) -> ProfileLookup:
        response = await self.api.request("GET", f"/api/v1/profiles/{user_id}")
        return ProfileLookup.model_validate(response.json())

    async def update(self, user_id: int, fields: dict[str, Any]) -> ProfileResponse:
        response = await self.api.request("PUT", f"/api/v1/profiles/{user_id}", json=fields)
        return ProfileResponse.model_validate(response.json())

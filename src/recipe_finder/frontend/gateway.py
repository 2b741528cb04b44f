"""API gateway used by the client stores.

Wraps one ``httpx.AsyncClient``: attaches the bearer token of the injected
session to every request, fetches the CSRF cookie before state-changing
auth calls, and turns every outcome into an :class:`ApiResult` instead of
raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

import httpx
import orjson

from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_finder.frontend.session import SessionContext


logger = get_logger(__name__)

DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "X-Requested-With": "XMLHttpRequest",
}
CSRF_COOKIE: Final[str] = "XSRF-TOKEN"
CSRF_HEADER: Final[str] = "X-CSRF-TOKEN"


@dataclass(frozen=True, slots=True)
class ApiResult:
    """Outcome of one gateway call."""

    success: bool
    data: Any = None
    error: str | None = None


class ApiGateway:
    """Typed access to the Recipe Finder HTTP API.

    Args:
        session: Session context supplying the bearer token.
        base_url: API root including the prefix, e.g. ``http://localhost:8000/api``.
        transport: Optional transport (tests mount the ASGI app here).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        session: SessionContext,
        base_url: str = "http://localhost:8000/api",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._session = session
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=DEFAULT_HEADERS,
            transport=transport,
            timeout=timeout,
            event_hooks={"request": [self._attach_bearer]},
        )

    async def _attach_bearer(self, request: httpx.Request) -> None:
        token = self._session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> ApiGateway:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def csrf(self) -> bool:
        """Fetch the CSRF cookie and echo it in the header of later requests."""
        try:
            response = await self._http.get("/csrf-cookie")
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("CSRF cookie request failed", error=str(e))
            return False

        token = self._http.cookies.get(CSRF_COOKIE)
        if not token:
            logger.warning("No CSRF token found in cookies")
            return True
        self._http.headers[CSRF_HEADER] = token
        return True

    async def _call(
        self,
        method: str,
        url: str,
        default_error: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> ApiResult:
        if params is not None:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = await self._http.request(method, url, json=json, params=params)
        except httpx.HTTPError as e:
            logger.warning("API request failed", method=method, url=url, error=str(e))
            return ApiResult(success=False, error=str(e) or default_error)

        body = _decode(response)
        if response.is_success:
            return ApiResult(success=True, data=body)

        message = body.get("message") if isinstance(body, dict) else None
        if not message:
            message = f"Request failed with status code {response.status_code}"
        return ApiResult(success=False, data=body, error=message)

    async def login(self, email: str, password: str) -> ApiResult:
        await self.csrf()
        return await self._call(
            "POST",
            "/auth/login",
            "Login failed",
            json={"email": email, "password": password},
        )

    async def logout(self) -> ApiResult:
        await self.csrf()
        return await self._call("POST", "/auth/logout", "Logout failed")

    async def signup(self, payload: dict[str, Any]) -> ApiResult:
        await self.csrf()
        return await self._call("POST", "/auth/register", "Signup failed", json=payload)

    async def update_profile(self, payload: dict[str, Any]) -> ApiResult:
        return await self._call("POST", "/auth/update", "Update failed", json=payload)

    async def fetch_recipes(self, query: str = "") -> ApiResult:
        return await self._call(
            "GET",
            "/recipe",
            "Fetching recipes failed.",
            params={"query": query or None},
        )

    async def store_favorite(self, recipe_id: int) -> ApiResult:
        return await self._call(
            "POST",
            "/favorites",
            "Adding to favorites failed.",
            json={"recipe_id": recipe_id},
        )

    async def delete_favorite(self, recipe_id: int) -> ApiResult:
        return await self._call(
            "DELETE",
            "/favorites",
            "Removing from favorites failed.",
            json={"recipe_id": recipe_id},
        )

    async def check_favorite(self, recipe_id: int) -> ApiResult:
        return await self._call(
            "GET",
            "/favorites/check",
            "Checking favorite status failed.",
            params={"recipe_id": recipe_id},
        )

    async def fetch_favorites(
        self,
        *,
        search: str | None = None,
        sort_by_name: bool | None = None,
        limit: int | None = None,
        page: int | None = None,
    ) -> ApiResult:
        return await self._call(
            "GET",
            "/favorites",
            "Fetching favorites failed.",
            params={
                "search": search or None,
                "sort_by_name": sort_by_name,
                "limit": limit,
                "page": page,
            },
        )


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError:
        return None

"""Double-submit cookie CSRF protection.

The browser client first calls the csrf-cookie endpoint, which sets a random
token in a readable cookie. On every unsafe request the client copies the
cookie value into a header. A request that carries the cookie but not a
matching header is rejected with 403.

Requests without the cookie are not cookie-authenticated (the API uses bearer
tokens), so they are let through; this keeps non-browser clients working.
"""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_finder.core.exceptions import ForbiddenException, error_response
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from recipe_finder.core.config.settings import CsrfSettings

logger = get_logger(__name__)

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})


def generate_csrf_token() -> str:
    """Create a new URL-safe random token for the CSRF cookie."""
    return secrets.token_urlsafe(32)


class CSRFMiddleware(BaseHTTPMiddleware):
    """Reject unsafe requests whose CSRF header does not match the cookie."""

    def __init__(self, app: ASGIApp, *, settings: CsrfSettings) -> None:
        super().__init__(app)
        self.cookie_name = settings.cookie_name
        self.header_names = tuple(settings.header_names)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Verify the double-submitted token on unsafe methods."""
        if request.method in SAFE_METHODS:
            return await call_next(request)

        cookie_token = request.cookies.get(self.cookie_name)
        if not cookie_token:
            return await call_next(request)

        header_token = self._header_token(request)
        if header_token is None or not secrets.compare_digest(
            header_token, cookie_token
        ):
            logger.warning(
                "CSRF token mismatch",
                method=request.method,
                path=request.url.path,
                header_present=header_token is not None,
            )
            return error_response(
                request,
                ForbiddenException(
                    "CSRF token mismatch.",
                    error="CSRF_TOKEN_MISMATCH",
                ),
            )

        return await call_next(request)

    def _header_token(self, request: Request) -> str | None:
        for name in self.header_names:
            value = request.headers.get(name)
            if value:
                return value
        return None

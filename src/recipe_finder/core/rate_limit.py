"""Rate limiting using SlowAPI with in-process storage.

This module provides:
- The shared limiter used by endpoint decorators
- An IP-based key for credential endpoints
- The 429 handler rendering the standard error body
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from recipe_finder.core.config import get_settings
from recipe_finder.core.exceptions import RateLimitException, error_response
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI
    from fastapi.responses import ORJSONResponse
    from starlette.requests import Request

    from recipe_finder.core.config import Settings

logger = get_logger(__name__)


def _get_auth_rate_limit_key(request: Request) -> str:
    """Key credential endpoints by client IP to slow down brute forcing."""
    return f"auth:{get_remote_address(request)}"


class _AuthLimitHolder:
    """Credential-endpoint limit of the most recently configured app."""

    value: str | None = None


def _auth_limit() -> str:
    return _AuthLimitHolder.value or get_settings().rate_limiting.auth


# Decorators bind to this instance at import time; create_app configures it.
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    strategy="fixed-window",
    headers_enabled=False,
)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """Handle rate limit exceeded exceptions."""
    assert isinstance(exc, RateLimitExceeded)
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        method=request.method,
        client_ip=get_remote_address(request),
        limit=str(exc.detail),
    )
    return error_response(request, RateLimitException())


def setup_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Attach the limiter to the application."""
    limiter.enabled = settings.rate_limiting.enabled
    _AuthLimitHolder.value = settings.rate_limiting.auth
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    logger.debug("Rate limiting configured", enabled=limiter.enabled)


def rate_limit_auth() -> Any:
    """Apply the credential-endpoint limit (stricter, IP-based).

    Example:
        @router.post("/login")
        @rate_limit_auth()
        def login(request: Request, ...):
            ...
    """
    return limiter.limit(_auth_limit, key_func=_get_auth_rate_limit_key)

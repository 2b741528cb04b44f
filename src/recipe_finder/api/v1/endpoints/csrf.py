"""CSRF cookie endpoint.

Browser clients call this once before their first state-changing request.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from recipe_finder.api.dependencies import get_app_settings
from recipe_finder.core.config import Settings
from recipe_finder.core.middleware.csrf import generate_csrf_token


router = APIRouter(tags=["auth"])


@router.get(
    "/csrf-cookie",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Issue CSRF cookie",
    description="Sets the CSRF cookie that unsafe requests must echo in a header.",
)
async def csrf_cookie(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Response:
    """Set a fresh CSRF token cookie readable by the client script."""
    csrf = settings.security.csrf
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.set_cookie(
        key=csrf.cookie_name,
        value=generate_csrf_token(),
        max_age=csrf.cookie_max_age,
        secure=csrf.cookie_secure,
        httponly=False,
        samesite="lax",
        path="/",
    )
    return response

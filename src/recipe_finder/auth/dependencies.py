"""FastAPI security dependencies.

A request is authenticated when it presents a bearer JWT that verifies
against the signing key and whose ``jti`` still has a live row in
``access_tokens`` belonging to the token's subject.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from recipe_finder.api.dependencies import get_app_settings
from recipe_finder.auth.tokens import TokenError, decode_token
from recipe_finder.core.config import Settings
from recipe_finder.core.exceptions import UnauthorizedException
from recipe_finder.database.models import AccessToken, User
from recipe_finder.database.session import get_db
from recipe_finder.observability.logging import bind_context


bearer_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Bearer token returned by the login endpoint",
    auto_error=False,
)


@dataclass(frozen=True)
class AuthContext:
    """The authenticated user and the credential used for this request."""

    user: User
    access_token: AccessToken


def _is_expired(access_token: AccessToken) -> bool:
    if access_token.expires_at is None:
        return False
    expires_at = access_token.expires_at
    if expires_at.tzinfo is None:
        # SQLite drops tzinfo on the way back
        expires_at = expires_at.replace(tzinfo=UTC)
    return expires_at <= datetime.now(UTC)


def get_auth_context(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthContext:
    """Resolve the bearer credential into an :class:`AuthContext`.

    Raises:
        UnauthorizedException: If the credential is missing, invalid,
            expired or revoked.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException()

    try:
        payload = decode_token(credentials.credentials, settings=settings)
    except TokenError:
        raise UnauthorizedException() from None

    access_token = db.scalar(select(AccessToken).where(AccessToken.jti == payload.jti))
    if access_token is None or str(access_token.user_id) != payload.sub:
        raise UnauthorizedException()

    if _is_expired(access_token):
        raise UnauthorizedException()

    user = db.get(User, access_token.user_id)
    if user is None:
        raise UnauthorizedException()

    bind_context(user_id=user.id)
    return AuthContext(user=user, access_token=access_token)


def get_current_user(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> User:
    """Get the authenticated user for the request."""
    return auth.user


CurrentAuth = Annotated[AuthContext, Depends(get_auth_context)]
CurrentUser = Annotated[User, Depends(get_current_user)]

"""JWT bearer credential handling.

Access tokens are HS256 JWTs signed with ``JWT_SECRET_KEY``. Each carries a
``jti`` that must match a row in ``access_tokens``; the JWT alone only proves
the token was issued by this server, the row proves it is still live.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from pydantic import BaseModel, ValidationError

from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_finder.core.config import Settings


logger = get_logger(__name__)


class TokenPayload(BaseModel):
    """JWT token payload model."""

    sub: str  # User ID
    exp: datetime
    iat: datetime
    jti: str
    type: str = "access"


class IssuedToken(BaseModel):
    """A freshly signed token together with the claims to persist."""

    token: str
    jti: str
    expires_at: datetime


class TokenError(Exception):
    """Base exception for token-related errors."""


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""


class TokenInvalidError(TokenError):
    """Raised when a token is invalid."""


def new_jti() -> str:
    """Generate a unique token identifier."""
    return uuid.uuid4().hex


def create_access_token(
    subject: str,
    *,
    settings: Settings,
    jti: str | None = None,
    expires_delta: timedelta | None = None,
) -> IssuedToken:
    """Create a new JWT access token.

    Args:
        subject: The subject of the token (the user id).
        settings: Application settings holding the signing key and lifetime.
        jti: Token identifier; generated when omitted.
        expires_delta: Custom lifetime. If None, uses the configured default.

    Returns:
        The encoded token with its ``jti`` and expiry.
    """
    if not settings.JWT_SECRET_KEY:
        msg = "JWT_SECRET_KEY is not configured"
        raise TokenError(msg)

    if expires_delta is None:
        expires_delta = timedelta(
            minutes=settings.auth.jwt.access_token_expire_minutes
        )

    jti = jti or new_jti()
    now = datetime.now(UTC)
    expire = now + expires_delta

    payload = {
        "sub": subject,
        "exp": expire,
        "iat": now,
        "jti": jti,
        "type": "access",
    }

    token = jwt.encode(
        payload,
        settings.JWT_SECRET_KEY,
        algorithm=settings.auth.jwt.algorithm,
    )
    return IssuedToken(token=token, jti=jti, expires_at=expire)


def decode_token(
    token: str,
    *,
    settings: Settings,
    verify_type: str | None = "access",
) -> TokenPayload:
    """Decode and validate a JWT token.

    Args:
        token: The JWT token string to decode.
        settings: Application settings holding the signing key.
        verify_type: If provided, verify the token is of this type.

    Returns:
        TokenPayload containing the decoded token data.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.auth.jwt.algorithm],
        )
    except ExpiredSignatureError as e:
        logger.debug("Token expired", error=str(e))
        msg = "Token has expired"
        raise TokenExpiredError(msg) from e
    except JWTError as e:
        logger.warning("Invalid token", error=str(e))
        msg = "Invalid token"
        raise TokenInvalidError(msg) from e

    if verify_type and payload.get("type") != verify_type:
        msg = f"Invalid token type. Expected {verify_type}, got {payload.get('type')}"
        raise TokenInvalidError(msg)

    try:
        return TokenPayload(**payload)
    except ValidationError as e:
        msg = "Invalid token claims"
        raise TokenInvalidError(msg) from e

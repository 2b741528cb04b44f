"""User accounts: registration, credentials, bearer tokens and profile.

Emails are stored lower-cased so uniqueness is case-insensitive.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from recipe_finder.auth.passwords import hash_password, verify_password
from recipe_finder.auth.tokens import create_access_token
from recipe_finder.core.exceptions import (
    BadRequestException,
    ConflictException,
    UnauthorizedException,
)
from recipe_finder.database.models import AccessToken, User
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from recipe_finder.core.config import Settings


logger = get_logger(__name__)

EMAIL_TAKEN = "The email has already been taken."
INVALID_CREDENTIALS = "Invalid credentials"
WRONG_CURRENT_PASSWORD = "Current password is incorrect"


def normalize_email(email: str) -> str:
    """Canonical form used for storage and lookups."""
    return email.strip().lower()


class UserService:
    """Account operations backed by the ``users`` and ``access_tokens`` tables."""

    def __init__(self, session: Session, settings: Settings) -> None:
        self._session = session
        self._settings = settings

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by email, case-insensitively."""
        return self._session.scalar(
            select(User).where(func.lower(User.email) == normalize_email(email))
        )

    def register(self, name: str, email: str, password: str) -> User:
        """Create an account.

        Raises:
            ConflictException: If the email is already registered.
        """
        email = normalize_email(email)
        if self.get_by_email(email) is not None:
            raise ConflictException(EMAIL_TAKEN, field="email")

        user = User(name=name, email=email, password_hash=hash_password(password))
        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            raise ConflictException(EMAIL_TAKEN, field="email") from None

        self._session.refresh(user)
        logger.info("User registered", user_id=user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials.

        Raises:
            UnauthorizedException: If the email is unknown or the password
                does not match.
        """
        user = self.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login rejected")
            raise UnauthorizedException(INVALID_CREDENTIALS)
        return user

    def issue_token(self, user: User) -> str:
        """Sign a bearer token for ``user`` and record it as live."""
        issued = create_access_token(str(user.id), settings=self._settings)
        self._session.add(
            AccessToken(
                user_id=user.id,
                jti=issued.jti,
                name=self._settings.auth.jwt.token_name,
                expires_at=issued.expires_at,
            )
        )
        self._session.commit()
        logger.info("Access token issued", user_id=user.id)
        return issued.token

    def revoke_token(self, access_token: AccessToken) -> None:
        """Revoke one credential; the user's other tokens stay valid."""
        self._session.execute(delete(AccessToken).where(AccessToken.id == access_token.id))
        self._session.commit()
        logger.info("Access token revoked", user_id=access_token.user_id)

    def update_profile(
        self,
        user: User,
        *,
        name: str,
        email: str,
        password: str | None = None,
        new_password: str | None = None,
    ) -> User:
        """Update name and email, and the password when a new one is given.

        Nothing is saved when any check fails.

        Raises:
            ConflictException: If the email belongs to another user.
            BadRequestException: If ``password`` is not the current password.
        """
        email = normalize_email(email)
        owner = self.get_by_email(email)
        if owner is not None and owner.id != user.id:
            raise ConflictException(EMAIL_TAKEN, field="email")

        if new_password:
            if not password or not verify_password(password, user.password_hash):
                raise BadRequestException(WRONG_CURRENT_PASSWORD, field="password")
            user.password_hash = hash_password(new_password)

        user.name = name
        user.email = email
        try:
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            raise ConflictException(EMAIL_TAKEN, field="email") from None

        self._session.refresh(user)
        logger.info(
            "Profile updated",
            user_id=user.id,
            password_changed=bool(new_password),
        )
        return user

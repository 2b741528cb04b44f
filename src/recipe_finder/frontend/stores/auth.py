"""Authentication store: login, signup, logout and profile update."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from recipe_finder.frontend.models import User
from recipe_finder.frontend.router import AUTH_LANDING, PUBLIC_LANDING
from recipe_finder.frontend.stores.base import ActionResult
from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_finder.frontend.gateway import ApiGateway
    from recipe_finder.frontend.notifications import NotificationChannel
    from recipe_finder.frontend.router import Router
    from recipe_finder.frontend.session import SessionContext


logger = get_logger(__name__)


class AuthStore:
    """Drives the session through the API and announces every outcome."""

    def __init__(
        self,
        session: SessionContext,
        gateway: ApiGateway,
        notifications: NotificationChannel,
        router: Router,
    ) -> None:
        self._session = session
        self._gateway = gateway
        self._notifications = notifications
        self._router = router

    @property
    def user(self) -> User | None:
        return self._session.user

    @property
    def is_logged_in(self) -> bool:
        return self._session.is_authenticated

    def _fail(self, message: str) -> ActionResult:
        self._notifications.error(message)
        return ActionResult(success=False, message=message)

    def _succeed(self, message: str) -> ActionResult:
        self._notifications.success(message)
        return ActionResult(success=True, message=message)

    async def login_user(self, email: str, password: str) -> ActionResult:
        """Log in, persist the session and go to the search page."""
        result = await self._gateway.login(email, password)
        if not result.success:
            return self._fail(result.error or "Login failed")

        try:
            user = User.model_validate(result.data["user"])
            token = str(result.data["token"])
        except (KeyError, TypeError, ValidationError):
            logger.warning("Malformed login response")
            return self._fail("An error occurred during login")

        self._session.login(user, token)
        self._router.push(AUTH_LANDING)
        return self._succeed(result.data.get("message") or "Login successful")

    async def signup_user(
        self,
        name: str,
        email: str,
        password: str,
        password_confirmation: str,
    ) -> ActionResult:
        """Register an account. The new user still has to log in."""
        payload: dict[str, Any] = {
            "name": name,
            "email": email,
            "password": password,
            "password_confirmation": password_confirmation,
        }
        result = await self._gateway.signup(payload)
        if not result.success:
            return self._fail(result.error or "Signup failed")
        return self._succeed("Signup successful")

    async def logout_user(self) -> ActionResult:
        """Revoke the token (best effort), clear the session, go home."""
        result = await self._gateway.logout()
        if not result.success:
            logger.warning("Server-side logout failed", error=result.error)

        self._session.logout()
        self._router.push(PUBLIC_LANDING)
        return self._succeed("Logged out")

    async def update_profile(
        self,
        name: str,
        email: str,
        password: str | None = None,
        new_password: str | None = None,
    ) -> ActionResult:
        """Update the profile and replace the stored identity."""
        payload: dict[str, Any] = {"name": name, "email": email}
        if new_password:
            payload["password"] = password
            payload["new_password"] = new_password

        result = await self._gateway.update_profile(payload)
        if not result.success:
            return self._fail(result.error or "Update failed")

        try:
            user = User.model_validate(result.data["user"])
        except (KeyError, TypeError, ValidationError):
            return self._fail("Update failed")

        self._session.update_user(user)
        return self._succeed(result.data.get("message") or "Profile updated successfully")

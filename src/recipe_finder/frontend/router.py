"""Client routes and the navigation guard.

Every navigation is checked against the route's access level and the
session state, then announced on the notification channel as
"<name> Page" whatever the outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from recipe_finder.observability.logging import get_logger


if TYPE_CHECKING:
    from recipe_finder.frontend.notifications import NotificationChannel
    from recipe_finder.frontend.session import SessionContext


logger = get_logger(__name__)

PUBLIC_LANDING: Final[str] = "/"
AUTH_LANDING: Final[str] = "/search"


class RouteAccess(StrEnum):
    """Who may open a route."""

    PUBLIC = "public"
    GUEST_ONLY = "guest_only"
    AUTH_ONLY = "auth_only"


class RouteNotFoundError(LookupError):
    """Raised when navigating to a path no route matches."""


@dataclass(frozen=True, slots=True)
class Route:
    path: str
    name: str
    access: RouteAccess = RouteAccess.PUBLIC


ROUTES: Final[tuple[Route, ...]] = (
    Route("/", "home", RouteAccess.GUEST_ONLY),
    Route("/about", "about", RouteAccess.GUEST_ONLY),
    Route("/profile", "profile", RouteAccess.AUTH_ONLY),
    Route("/saved", "saved", RouteAccess.AUTH_ONLY),
    Route("/search", "search", RouteAccess.AUTH_ONLY),
)


@dataclass(frozen=True, slots=True)
class Navigation:
    """Outcome of a guarded navigation."""

    requested: Route
    route: Route

    @property
    def redirected(self) -> bool:
        return self.requested != self.route


def guard(route: Route, *, authenticated: bool) -> str | None:
    """Decide where a navigation to ``route`` must go instead.

    Returns:
        The redirect path, or None to proceed.
    """
    if route.access is RouteAccess.AUTH_ONLY and not authenticated:
        return PUBLIC_LANDING
    if route.access is RouteAccess.GUEST_ONLY and authenticated:
        return AUTH_LANDING
    return None


class Router:
    """Resolves paths to routes and applies the guard on every push."""

    def __init__(
        self,
        session: SessionContext,
        notifications: NotificationChannel,
        routes: tuple[Route, ...] = ROUTES,
    ) -> None:
        self._session = session
        self._notifications = notifications
        self._routes = {route.path: route for route in routes}
        self.current: Route | None = None

    def resolve(self, path: str) -> Route:
        """Find the route for ``path``.

        Raises:
            RouteNotFoundError: If no route has this path.
        """
        normalized = path.split("?", 1)[0].split("#", 1)[0]
        if len(normalized) > 1:
            normalized = normalized.rstrip("/")
        route = self._routes.get(normalized or "/")
        if route is None:
            msg = f"No route matches {path!r}"
            raise RouteNotFoundError(msg)
        return route

    def push(self, path: str) -> Navigation:
        """Navigate to ``path``, following at most one guard redirect."""
        requested = self.resolve(path)
        self._notifications.show(f"{requested.name} Page")

        redirect = guard(requested, authenticated=self._session.is_authenticated)
        route = requested if redirect is None else self.resolve(redirect)
        if redirect is not None:
            # The redirect is a navigation of its own and is announced too
            self._notifications.show(f"{route.name} Page")
            logger.debug("Navigation redirected", requested=requested.path, to=route.path)

        self.current = route
        return Navigation(requested=requested, route=route)

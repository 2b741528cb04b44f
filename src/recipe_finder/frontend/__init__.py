"""Client-side state layer of the web UI.

Wiring, leaf first::

    storage = MemoryTabStorage()
    session = SessionContext(storage)
    notifications = NotificationChannel()
    gateway = ApiGateway(session, "http://localhost:8000/api")
    router = Router(session, notifications)
    auth = AuthStore(session, gateway, notifications, router)
"""

from recipe_finder.frontend.content import FeatureIcon, HomeContent
from recipe_finder.frontend.gateway import ApiGateway, ApiResult
from recipe_finder.frontend.notifications import NotificationChannel, NotificationKind
from recipe_finder.frontend.router import (
    Route,
    RouteAccess,
    RouteNotFoundError,
    Router,
)
from recipe_finder.frontend.session import MemoryTabStorage, SessionContext, TabStorage
from recipe_finder.frontend.stores import (
    ActionResult,
    AuthStore,
    FavoritesStore,
    RecipeSearchStore,
)


__all__ = [
    "ActionResult",
    "ApiGateway",
    "ApiResult",
    "AuthStore",
    "FavoritesStore",
    "FeatureIcon",
    "HomeContent",
    "MemoryTabStorage",
    "NotificationChannel",
    "NotificationKind",
    "RecipeSearchStore",
    "Route",
    "RouteAccess",
    "RouteNotFoundError",
    "Router",
    "SessionContext",
    "TabStorage",
]

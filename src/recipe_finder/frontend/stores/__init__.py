"""Client stores backing the views."""

from recipe_finder.frontend.stores.auth import AuthStore
from recipe_finder.frontend.stores.base import ActionResult
from recipe_finder.frontend.stores.favorites import FavoritesStore
from recipe_finder.frontend.stores.recipes import RecipeSearchStore


__all__ = [
    "ActionResult",
    "AuthStore",
    "FavoritesStore",
    "RecipeSearchStore",
]

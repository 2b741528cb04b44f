"""Per-user favorite recipes."""

from recipe_finder.services.favorites.models import FavoritesPage
from recipe_finder.services.favorites.service import FavoritesService


__all__ = [
    "FavoritesPage",
    "FavoritesService",
]

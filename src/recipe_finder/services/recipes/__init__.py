"""Recipe search and catalog reconciliation."""

from recipe_finder.services.recipes.models import RecipeSearchResult, RecipeSource
from recipe_finder.services.recipes.service import RecipeService


__all__ = [
    "RecipeSearchResult",
    "RecipeService",
    "RecipeSource",
]

"""Spoonacular recipe API client."""

from recipe_finder.clients.spoonacular.client import SpoonacularClient
from recipe_finder.clients.spoonacular.exceptions import (
    SpoonacularError,
    SpoonacularResponseError,
    SpoonacularUnavailableError,
)
from recipe_finder.clients.spoonacular.schemas import (
    SpoonacularIngredient,
    SpoonacularRecipe,
)


__all__ = [
    "SpoonacularClient",
    "SpoonacularError",
    "SpoonacularIngredient",
    "SpoonacularRecipe",
    "SpoonacularResponseError",
    "SpoonacularUnavailableError",
]

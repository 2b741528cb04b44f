"""ORM models.

Importing this package registers every table on ``BaseDatabaseModel.metadata``.
"""

from recipe_finder.database.models.base import BaseDatabaseModel
from recipe_finder.database.models.favorite import Favorite
from recipe_finder.database.models.recipe import (
    DishType,
    Ingredient,
    Recipe,
    RecipeIngredient,
    recipe_dish_types,
)
from recipe_finder.database.models.user import AccessToken, User


__all__ = [
    "AccessToken",
    "BaseDatabaseModel",
    "DishType",
    "Favorite",
    "Ingredient",
    "Recipe",
    "RecipeIngredient",
    "User",
    "recipe_dish_types",
]

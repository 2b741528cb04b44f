"""Spoonacular payload factories.

Uses polyfactory for consistent test data generation. ``payload`` helpers
return the camelCase dicts the API actually sends.
"""

from __future__ import annotations

import itertools
from typing import Any

from polyfactory.factories.pydantic_factory import ModelFactory

from recipe_finder.clients.spoonacular import SpoonacularIngredient, SpoonacularRecipe


_recipe_ids = itertools.count(700_000)
_ingredient_ids = itertools.count(20_000)
_ingredient_names = itertools.count(1)


class SpoonacularIngredientFactory(ModelFactory[SpoonacularIngredient]):
    """Factory for generating ingredient lines."""

    __model__ = SpoonacularIngredient

    @classmethod
    def id(cls) -> int:
        """Generate a unique provider ingredient id."""
        return next(_ingredient_ids)

    @classmethod
    def name(cls) -> str:
        return f"{cls.__faker__.word()} {next(_ingredient_names)}"

    @classmethod
    def amount(cls) -> float:
        return float(cls.__random__.randint(1, 500))

    @classmethod
    def unit(cls) -> str:
        return cls.__random__.choice(["g", "ml", "cup", "tbsp"])

    @classmethod
    def payload(cls, **kwargs: Any) -> dict[str, Any]:
        """Build an ingredient as the provider sends it."""
        return cls.build(**kwargs).model_dump(by_alias=True)


class SpoonacularRecipeFactory(ModelFactory[SpoonacularRecipe]):
    """Factory for generating recipes as returned by search or random."""

    __model__ = SpoonacularRecipe

    @classmethod
    def id(cls) -> int:
        """Generate a unique provider recipe id."""
        return next(_recipe_ids)

    @classmethod
    def title(cls) -> str:
        return cls.__faker__.sentence(nb_words=3).rstrip(".")

    @classmethod
    def image(cls) -> str:
        return cls.__faker__.image_url()

    @classmethod
    def ready_in_minutes(cls) -> int:
        return cls.__random__.randint(5, 120)

    @classmethod
    def servings(cls) -> int:
        return cls.__random__.randint(1, 8)

    @classmethod
    def summary(cls) -> str:
        return cls.__faker__.paragraph()

    @classmethod
    def instructions(cls) -> str:
        return cls.__faker__.paragraph()

    @classmethod
    def source_url(cls) -> str:
        return cls.__faker__.url()

    @classmethod
    def dish_types(cls) -> list[str]:
        return ["main course"]

    @classmethod
    def extended_ingredients(cls) -> list[SpoonacularIngredient]:
        return SpoonacularIngredientFactory.batch(size=2)

    @classmethod
    def payload(cls, **kwargs: Any) -> dict[str, Any]:
        """Build a recipe as the provider sends it (camelCase keys)."""
        return cls.build(**kwargs).model_dump(by_alias=True)

    @classmethod
    def batch_payload(cls, size: int, **kwargs: Any) -> list[dict[str, Any]]:
        return [cls.payload(**kwargs) for _ in range(size)]

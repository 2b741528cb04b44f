"""Schemas for the Spoonacular recipe API.

Only the fields this application stores are declared; everything else in the
payload is ignored.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from recipe_finder.schemas.base import DownstreamResponse


class SpoonacularIngredient(DownstreamResponse):
    """One entry of a recipe's ``extendedIngredients``."""

    id: int | None = None
    name: str = Field(..., min_length=1)
    amount: float | None = None
    unit: str | None = None

    @field_validator("unit")
    @classmethod
    def _blank_unit_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class SpoonacularRecipe(DownstreamResponse):
    """A recipe as returned by ``complexSearch`` or ``random``."""

    id: int
    title: str = Field(..., min_length=1)
    image: str | None = None
    ready_in_minutes: int | None = None
    servings: int | None = None
    summary: str | None = None
    instructions: str | None = None
    source_url: str | None = None
    dish_types: list[str] = Field(default_factory=list)
    extended_ingredients: list[SpoonacularIngredient] = Field(default_factory=list)

    @field_validator("dish_types", mode="before")
    @classmethod
    def _clean_dish_types(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [item.strip() for item in v if isinstance(item, str) and item.strip()]
        return v

    @field_validator("extended_ingredients", mode="before")
    @classmethod
    def _drop_unnamed_ingredients(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list):
            return [item for item in v if _is_named_ingredient(item)]
        return v


def _is_named_ingredient(item: Any) -> bool:
    if isinstance(item, SpoonacularIngredient):
        return True
    if isinstance(item, dict):
        name = item.get("name")
        return isinstance(name, str) and bool(name.strip())
    return False

"""Recipe resource schemas.

The recipe resource is serialized with camelCase keys (``readyInMinutes``,
``extendedIngredients``) to match the provider's shape.
"""

from __future__ import annotations

from pydantic import Field

from recipe_finder.schemas.base import APIResponse, CamelAPIResponse


class IngredientResource(CamelAPIResponse):
    """An ingredient line of a recipe; ``id`` is the provider id."""

    id: int | None = None
    name: str
    amount: float | None = None
    unit: str | None = None


class RecipeResource(CamelAPIResponse):
    """A stored recipe with its dish types and ingredients."""

    id: int
    title: str
    image: str | None = None
    ready_in_minutes: int | None = None
    servings: int | None = None
    dish_types: list[str] = Field(default_factory=list)
    summary: str | None = None
    extended_ingredients: list[IngredientResource] = Field(default_factory=list)
    instructions: str | None = None
    source_url: str | None = None


class RecipeListResponse(APIResponse):
    """Response body of a recipe search."""

    status: str = "success"
    source: str
    count: int
    data: list[RecipeResource]

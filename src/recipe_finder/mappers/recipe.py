"""Recipe-related data mappers.

Transforms stored recipes into the API recipe resource and builds the search
and favorites list envelopes around them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_finder.schemas.favorite import FavoriteListResponse
from recipe_finder.schemas.recipe import (
    IngredientResource,
    RecipeListResponse,
    RecipeResource,
)


if TYPE_CHECKING:
    from recipe_finder.database.models import Recipe
    from recipe_finder.services.favorites import FavoritesPage
    from recipe_finder.services.recipes import RecipeSearchResult


def build_recipe_resource(recipe: Recipe) -> RecipeResource:
    """Build the API resource for one stored recipe.

    Args:
        recipe: Recipe with dish types and ingredients loaded.

    Returns:
        Resource with dish type names and provider-keyed ingredient lines.
    """
    ingredients = [
        IngredientResource(
            id=link.ingredient.external_id,
            name=link.ingredient.name,
            amount=link.amount,
            unit=link.unit,
        )
        for link in recipe.ingredients
    ]

    return RecipeResource(
        id=recipe.id,
        title=recipe.title,
        image=recipe.image,
        ready_in_minutes=recipe.ready_in_minutes,
        servings=recipe.servings,
        dish_types=[dish_type.name for dish_type in recipe.dish_types],
        summary=recipe.summary,
        extended_ingredients=ingredients,
        instructions=recipe.instructions,
        source_url=recipe.source_url,
    )


def build_recipe_list_response(result: RecipeSearchResult) -> RecipeListResponse:
    """Wrap a search result in the list envelope."""
    data = [build_recipe_resource(recipe) for recipe in result.recipes]
    return RecipeListResponse(source=str(result.source), count=len(data), data=data)


def build_favorite_list_response(
    page: FavoritesPage,
    *,
    search: str | None,
    sort_by_name: bool,
) -> FavoriteListResponse:
    """Wrap a page of favorites in the list envelope, echoing the filters."""
    return FavoriteListResponse(
        count=page.count,
        total=page.total,
        current_page=page.current_page,
        last_page=page.last_page,
        search=search,
        sort_by_name=sort_by_name,
        data=[build_recipe_resource(recipe) for recipe in page.items],
    )

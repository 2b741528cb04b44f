"""Recipe search endpoint."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from recipe_finder.api.dependencies import get_recipe_service
from recipe_finder.mappers import build_recipe_list_response
from recipe_finder.schemas.recipe import RecipeListResponse
from recipe_finder.services.recipes import RecipeService


router = APIRouter(tags=["recipes"])


@router.get(
    "/recipe",
    response_model=RecipeListResponse,
    summary="Search recipes",
    description=(
        "Search Spoonacular and store the results locally. When Spoonacular "
        "is unavailable the stored catalog is searched instead; ``source`` "
        "tells which one answered."
    ),
)
async def search_recipes(
    service: Annotated[RecipeService, Depends(get_recipe_service)],
    query: Annotated[
        str | None,
        Query(max_length=200, description="Free-text search; random when empty"),
    ] = None,
) -> RecipeListResponse:
    """Search recipes by free text."""
    result = await service.search(query)
    return build_recipe_list_response(result)

"""Favorite recipe endpoints. All routes require a bearer token."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status

from recipe_finder.api.dependencies import get_favorites_service
from recipe_finder.auth.dependencies import CurrentUser
from recipe_finder.mappers import build_favorite_list_response
from recipe_finder.schemas.favorite import (
    MAX_PAGE,
    MAX_RECIPE_ID,
    FavoriteCheckResponse,
    FavoriteCreatedResponse,
    FavoriteData,
    FavoriteDeletedResponse,
    FavoriteListResponse,
    FavoriteRequest,
)
from recipe_finder.services.favorites import FavoritesService


router = APIRouter(prefix="/favorites", tags=["favorites"])

FavoritesDep = Annotated[FavoritesService, Depends(get_favorites_service)]


@router.post(
    "",
    response_model=FavoriteCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a favorite",
    responses={
        404: {"description": "Recipe does not exist"},
        409: {"description": "Recipe is already a favorite"},
    },
)
def add_favorite(
    body: FavoriteRequest,
    user: CurrentUser,
    favorites: FavoritesDep,
) -> FavoriteCreatedResponse:
    """Favorite a recipe for the current user."""
    favorite = favorites.add(user.id, body.recipe_id)
    return FavoriteCreatedResponse(
        message="Recipe added to favorites successfully",
        data=FavoriteData.model_validate(favorite),
    )


@router.get(
    "",
    response_model=FavoriteListResponse,
    summary="List favorites",
)
def list_favorites(
    user: CurrentUser,
    favorites: FavoritesDep,
    search: Annotated[str | None, Query(max_length=200)] = None,
    sort_by_name: bool = False,
    page: Annotated[int, Query(ge=1, le=MAX_PAGE)] = 1,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> FavoriteListResponse:
    """List the current user's favorites, newest first unless sorted by name."""
    result = favorites.list(
        user.id,
        search=search,
        sort_by_name=sort_by_name,
        page=page,
        limit=limit,
    )
    return build_favorite_list_response(
        result,
        search=search,
        sort_by_name=sort_by_name,
    )


@router.delete(
    "",
    response_model=FavoriteDeletedResponse,
    summary="Remove a favorite",
    responses={404: {"description": "Recipe is not a favorite"}},
)
def remove_favorite(
    body: Annotated[FavoriteRequest, Body()],
    user: CurrentUser,
    favorites: FavoritesDep,
) -> FavoriteDeletedResponse:
    """Unfavorite a recipe for the current user."""
    favorites.remove(user.id, body.recipe_id)
    return FavoriteDeletedResponse(message="Recipe removed from favorites successfully")


@router.get(
    "/check",
    response_model=FavoriteCheckResponse,
    summary="Check a favorite",
)
def check_favorite(
    user: CurrentUser,
    favorites: FavoritesDep,
    recipe_id: Annotated[int, Query(gt=0, le=MAX_RECIPE_ID)],
) -> FavoriteCheckResponse:
    """Whether the current user has favorited the recipe."""
    return FavoriteCheckResponse(
        is_favorited=favorites.is_favorited(user.id, recipe_id),
    )

"""Favorite schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from recipe_finder.schemas.base import APIRequest, APIResponse
from recipe_finder.schemas.recipe import RecipeResource


# Largest id a 32-bit INTEGER column holds
MAX_RECIPE_ID = 2**31 - 1
MAX_PAGE = 100_000


class FavoriteRequest(APIRequest):
    """Request body naming a recipe to favorite or unfavorite."""

    recipe_id: int = Field(..., gt=0, le=MAX_RECIPE_ID)


class FavoriteData(APIResponse):
    """A stored favorite row."""

    user_id: int
    recipe_id: int
    created_at: datetime


class FavoriteCreatedResponse(APIResponse):
    """Response body of a successful add."""

    status: str = "success"
    message: str
    data: FavoriteData


class FavoriteDeletedResponse(APIResponse):
    """Response body of a successful removal."""

    status: str = "success"
    message: str


class FavoriteCheckResponse(APIResponse):
    """Response body of a favorite check."""

    status: str = "success"
    is_favorited: bool


class FavoriteListResponse(APIResponse):
    """One page of favorited recipes."""

    status: str = "success"
    count: int
    total: int
    current_page: int
    last_page: int
    search: str | None = None
    sort_by_name: bool = False
    data: list[RecipeResource]

"""FastAPI dependencies for settings and service access.

Settings, the database session factory and the Spoonacular client are created
once per application by ``create_app`` and the lifespan, and stored in
``app.state``. Services are built per request around the request's session.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from recipe_finder.clients.spoonacular import SpoonacularClient
from recipe_finder.core.config import Settings
from recipe_finder.database.session import get_db
from recipe_finder.services.favorites import FavoritesService
from recipe_finder.services.recipes import RecipeService
from recipe_finder.services.users import UserService


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings: Settings = request.app.state.settings
    return settings


def get_spoonacular_client(request: Request) -> SpoonacularClient | None:
    """Get the Spoonacular client from app state.

    Returns None when the client is not initialized; searches then use the
    local catalog only.
    """
    return getattr(request.app.state, "spoonacular_client", None)


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    client: Annotated[SpoonacularClient | None, Depends(get_spoonacular_client)],
) -> RecipeService:
    """Build the recipe service for this request."""
    return RecipeService(
        db,
        client,
        results_limit=settings.spoonacular.results_limit,
        upsert_policy=settings.spoonacular.upsert_policy,
    )


def get_favorites_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> FavoritesService:
    """Build the favorites service for this request."""
    return FavoritesService(
        db,
        default_limit=settings.favorites.default_limit,
        max_limit=settings.favorites.max_limit,
    )


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserService:
    """Build the user service for this request."""
    return UserService(db, settings)

"""Application lifespan event handlers.

Startup configures logging and opens the shared Spoonacular HTTP client;
shutdown closes it and disposes the database engine.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_finder.clients.spoonacular import SpoonacularClient
from recipe_finder.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

    from recipe_finder.core.config import Settings

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
        log_file=settings.logging.file,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Tests may install a client wired to a mock transport beforehand
    if getattr(app.state, "spoonacular_client", None) is None:
        client = SpoonacularClient.from_settings(settings)
        await client.initialize()
        app.state.spoonacular_client = client

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    """Release application resources."""
    logger.info("Shutting down application")

    client: SpoonacularClient | None = getattr(app.state, "spoonacular_client", None)
    if client is not None:
        await client.shutdown()
        app.state.spoonacular_client = None

    app.state.engine.dispose()
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    settings: Settings = app.state.settings
    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)

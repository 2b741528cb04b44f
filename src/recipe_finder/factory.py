"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Builds the database engine and session factory
- Sets up middleware stack in the correct order
- Registers exception handlers and rate limiting
- Mounts API routers
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from recipe_finder.api.v1.router import router as api_router
from recipe_finder.core.config import Settings, get_settings
from recipe_finder.core.events import lifespan
from recipe_finder.core.exceptions import setup_exception_handlers
from recipe_finder.core.middleware import (
    CSRFMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
)
from recipe_finder.core.rate_limit import setup_rate_limiting
from recipe_finder.database.session import (
    create_db_engine,
    create_session_factory,
    create_tables,
)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    docs_enabled = settings.is_non_production
    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipe Finder - search recipes and keep your favorites",
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes
    app.state.settings = settings

    engine = create_db_engine(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    if settings.database.create_tables:
        create_tables(engine)

    setup_exception_handlers(app)
    setup_rate_limiting(app, settings)

    # Setup middleware (order matters - first added = last executed)
    _setup_middleware(app, settings)

    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. SecurityHeadersMiddleware (adds security headers)
    2. RequestIDMiddleware (adds request ID for correlation)
    3. TimingMiddleware (measures request time)
    4. LoggingMiddleware (logs requests/responses)
    5. CSRFMiddleware (double-submit check on unsafe methods)
    6. GZipMiddleware (compresses responses)
    7. CORSMiddleware (handles CORS)
    """
    # CORS - must be added first (runs last on request, first on response)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.api.cors_origins],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    if settings.security.csrf.enabled:
        app.add_middleware(CSRFMiddleware, settings=settings.security.csrf)

    prefix = settings.api.prefix.rstrip("/")
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths={f"{prefix}/health", f"{prefix}/ready", "/favicon.ico"},
    )

    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        SecurityHeadersMiddleware,
        api_prefix=settings.api.prefix,
        hsts=settings.is_production,
    )


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers."""
    app.include_router(api_router, prefix=settings.api.prefix)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint returning basic service info."""
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": "/docs" if settings.is_non_production else "disabled",
        }

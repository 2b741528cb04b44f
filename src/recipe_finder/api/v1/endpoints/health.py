"""Health check endpoints.

Provides liveness and readiness probes for orchestrators and load balancers.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from recipe_finder.api.dependencies import get_app_settings
from recipe_finder.core.config import Settings
from recipe_finder.database.session import check_database_health


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness check response with dependency status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of external dependencies",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive. External dependencies are not checked."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying the database is reachable.",
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse | ORJSONResponse:
    """Check if the service is ready to handle requests.

    The recipe provider is not a readiness dependency: searches fall back to
    the local catalog when it is down.
    """
    database_ok = await run_in_threadpool(check_database_health, request.app.state.engine)
    client = getattr(request.app.state, "spoonacular_client", None)

    response = ReadinessResponse(
        status="ready" if database_ok else "not_ready",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies={
            "database": "healthy" if database_ok else "unhealthy",
            "spoonacular": (
                "configured"
                if client is not None and client.configured
                else "not_configured"
            ),
        },
    )
    if not database_ok:
        return ORJSONResponse(status_code=503, content=response.model_dump(mode="json"))
    return response

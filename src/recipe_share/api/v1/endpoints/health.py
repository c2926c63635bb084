"""Health check endpoints.

Liveness and readiness probes for Kubernetes and load balancers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from recipe_share.api.dependencies import get_app_settings
from recipe_share.core.config import Settings  # noqa: TC001
from recipe_share.database import check_database_health
from recipe_share.schemas.health import HealthResponse, ReadinessResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Report that the process is serving requests.

    Does not touch the database.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    """Report whether the database is reachable."""
    dependencies = await check_database_health()
    all_healthy = all(status == "healthy" for status in dependencies.values())

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )

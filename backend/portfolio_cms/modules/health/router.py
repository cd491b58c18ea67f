"""Health check endpoints."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from portfolio_cms.config import settings
from portfolio_cms.core.database import check_db_connection
from portfolio_cms.core.redis import check_redis_connection
from portfolio_cms.core.storage import asset_manager

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response with dependency status."""

    status: str
    checks: dict[str, bool]


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Basic health check",
    description="Returns OK if the service is running.",
)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=settings.app_version)


@router.get(
    "/health/live",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def liveness() -> HealthResponse:
    """Liveness probe - the process answers."""
    return HealthResponse(status="ok", version=settings.app_version)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Checks the database, Redis and storage configuration.",
    responses={
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "description": "The database is unreachable",
        }
    },
)
async def readiness(response: Response) -> ReadinessResponse:
    """Readiness probe.

    Only the database is required; Redis and storage degrade the status
    without failing it, since public pages work without them.
    """
    db_ok = await check_db_connection()
    redis_ok = await check_redis_connection()
    storage_ok = asset_manager.is_configured

    if not db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        status_str = "unavailable"
    elif redis_ok and storage_ok:
        status_str = "ok"
    else:
        status_str = "degraded"

    return ReadinessResponse(
        status=status_str,
        checks={
            "database": db_ok,
            "redis": redis_ok,
            "storage": storage_ok,
        },
    )

"""
Health Check Routes

System health and status endpoints.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from toonpack import __version__
from toonpack.database import get_db
from toonpack.schemas import HealthResponse
from toonpack.services.storage import StorageService, get_storage_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
) -> HealthResponse:
    """
    Health check endpoint.

    Returns overall system health and individual service statuses.
    """
    services = {}

    # Check database
    try:
        await db.execute(text("SELECT 1"))
        services["database"] = "healthy"
    except Exception as e:
        logger.error("Database health check failed: %s", type(e).__name__)
        services["database"] = "unhealthy"

    # Check object storage
    services["storage"] = "healthy" if storage.health_check() else "unhealthy"

    all_healthy = all(s == "healthy" for s in services.values())

    return HealthResponse(
        status="healthy" if all_healthy else "degraded",
        version=__version__,
        services=services,
    )


@router.get("/health/live")
async def liveness():
    """
    Kubernetes liveness probe.

    Returns 200 if the application is running.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """
    Kubernetes readiness probe.

    Returns 200 if the application is ready to serve requests.
    """
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.error("Readiness check failed")
        return {"status": "not ready"}

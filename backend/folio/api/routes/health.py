"""Health & Readiness Probes — liveness, readiness, and service identity.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - GET /about reports name, version, and environment from settings
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from folio.api.dependencies import get_services
from folio.services.registry import Services

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["health"])


@router.get("/health/", status_code=status.HTTP_200_OK)
async def health_check(services: Services = Depends(get_services)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": services.settings.service_name,
        "version": services.settings.service_version,
    }


@router.get("/health/ready")
async def readiness_check(services: Services = Depends(get_services)):
    """Readiness probe — includes database connectivity."""
    if not await services.db.health_check():
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}


@router.get("/about")
async def about(services: Services = Depends(get_services)):
    settings = services.settings
    return {
        "name": settings.service_name,
        "version": settings.service_version,
        "environment": settings.environment,
    }

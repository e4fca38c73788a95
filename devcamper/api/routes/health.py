"""Health & Readiness Probes — process liveness and database readiness.

Invariants:
    - GET /health/ answers 200 whenever the process can serve requests
    - GET /health/ready answers 503 until the session manager exists and the
      database accepts a query
    - Both use the same success/error envelopes as every other route
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from devcamper.api.envelopes import single
from devcamper.config import Settings, get_settings
from devcamper.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness(settings: Settings = Depends(get_settings)):
    return single({
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    })


@router.get("/ready")
async def readiness():
    """Ready only when a pooled connection can run SELECT 1."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "error": "Database unavailable"},
        )
    return single({"status": "ready", "checks": {"database": "healthy"}})

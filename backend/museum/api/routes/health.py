"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until the catalog cache holds a snapshot
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from museum.api.dependencies import get_container
from museum.container import AppContainer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "museum-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(container: AppContainer = Depends(get_container)):
    """Readiness check — the catalog has been loaded at least once."""
    count = len(container.storage.snapshot)
    if not count:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "catalog_empty"},
        )
    return {"status": "ready", "checks": {"catalog": "loaded", "objects": count}}

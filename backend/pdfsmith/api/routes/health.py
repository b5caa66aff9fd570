"""Health & Readiness Probes: liveness and readiness endpoints for the orchestrator.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the log store is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from pdfsmith import __version__
from pdfsmith.api.dependencies import get_pool
from pdfsmith.infrastructure.database import ConnectionPool

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "pdfsmith",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(pool: ConnectionPool | None = Depends(get_pool)):
    """Readiness probe: includes log store connectivity."""
    db_ok = await pool.health_check() if pool else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}

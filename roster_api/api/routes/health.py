"""Health & Readiness Checks — liveness and readiness endpoints.

Invariants:
    - GET / always returns 200 plain text if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      load balancer (ADR: production readiness)
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

from roster_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

LIVENESS_TEXT = "Roster API server running"


@router.get("/", response_class=PlainTextResponse)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return LIVENESS_TEXT


@router.get("/health/ready")
async def readiness_check():
    """Readiness check — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}

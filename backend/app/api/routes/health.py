"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if a configured preferences database is unreachable
    - No configured database is still "ready": settings writes degrade to non-persisted

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
      (ADR: production readiness)
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.repository_protocols import PreferencesStore

logger = logging.getLogger(__name__)

SERVICE_NAME = "hive-user-api"
SERVICE_VERSION = "1.0.0"


def build_health_router(preferences_store: PreferencesStore | None) -> APIRouter:
    router = APIRouter(prefix="/api/v1/health", tags=["health"])

    @router.get("/", status_code=status.HTTP_200_OK)
    async def health_check():
        """Basic liveness probe. Returns 200 if the process is up."""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
        }

    @router.get("/ready")
    async def readiness_check():
        """Readiness probe — includes database connectivity when configured."""
        if preferences_store is None:
            return {"status": "ready", "checks": {"database": "not_configured"}}
        db_ok = await preferences_store.health_check()
        if not db_ok:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "not_ready",
                    "reason": "database_unavailable",
                },
            )
        return {"status": "ready", "checks": {"database": "healthy"}}

    return router

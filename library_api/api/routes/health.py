"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /api/health always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if database is unreachable (readiness)
"""


from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from library_api.infrastructure.database import DatabaseSessionManager, get_db_manager
from library_api.schemas.envelope import error_response, success_response

router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "library-api"
SERVICE_VERSION = "1.0.0"


@router.get("")
async def health_check() -> JSONResponse:
    """Basic liveness probe. Returns 200 if the process is up."""
    return success_response(
        "Library API is running",
        {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION},
    )


@router.get("/ready")
async def readiness_check(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> JSONResponse:
    """Readiness probe — includes database connectivity."""
    if not await manager.health_check():
        return error_response(
            "Database unavailable",
            {"status": "not_ready", "reason": "database_unavailable"},
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return success_response(
        "Ready", {"status": "ready", "checks": {"database": "healthy"}},
    )

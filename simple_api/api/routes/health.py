"""Health & Readiness Probes - liveness and readiness endpoints.

Invariants:
    - GET /health always returns 200 if the process is up (no storage access)
    - GET /health/ready returns 503 if the Storage Gateway cannot be reached

Design Decisions:
    - Separate liveness/readiness: a slow database must not restart the container
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from simple_api.config import API_VERSION
from simple_api.core.repository_protocols import UserRepository
from simple_api.infrastructure.database import get_user_repository
from simple_api.schemas.health import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version=API_VERSION,
    )


@router.get("/ready")
async def readiness_check(
    repository: UserRepository = Depends(get_user_repository),
):
    """Readiness probe, includes database connectivity."""
    if not await repository.ping():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}

"""
Health check endpoints.
- /health - Basic liveness check
- /ready - Readiness check with database connectivity
"""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException

from ..config import get_settings
from ..db import DatabasePool, get_db_pool, verify_connectivity
from ..models import HealthResponse, ReadyResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.
    Returns 200 if the service is running.
    """
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now(UTC),
    )


@router.get("/ready", response_model=ReadyResponse)
async def readiness_check(pool: DatabasePool = Depends(get_db_pool)) -> ReadyResponse:
    """
    Readiness check endpoint.
    Acquires and releases one pooled connection before returning healthy.
    """
    result = await verify_connectivity(pool, log=False)
    db_status = "connected" if result.ok else f"error: {result.detail}"

    response = ReadyResponse(
        status="ready" if result.ok else "not_ready",
        database=db_status,
        pool=pool.stats(),
        timestamp=datetime.now(UTC),
    )

    if not result.ok:
        raise HTTPException(status_code=503, detail=response.model_dump(mode="json"))

    return response

"""
Pydantic models for pool state and response schemas.
"""

from datetime import datetime

from pydantic import BaseModel, Field

# =============================================================================
# Pool Models
# =============================================================================

class PoolStats(BaseModel):
    """Connection counts reported by the pool."""
    size: int = Field(..., ge=0)  # connections currently open
    max_size: int = Field(..., ge=1)
    idle: int = Field(..., ge=0)
    active: int = Field(..., ge=0)  # handed out and not yet released
    waiting: int = Field(..., ge=0)  # acquirers queued for a free slot


class ProbeResult(BaseModel):
    """Outcome of the one-shot connectivity probe."""
    ok: bool
    detail: str | None = None
    missing: list[str] = Field(default_factory=list)
    timestamp: datetime


# =============================================================================
# Health Check Models
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    timestamp: datetime


class ReadyResponse(BaseModel):
    """Readiness check response with component status."""
    status: str
    database: str
    pool: PoolStats | None = None
    timestamp: datetime

# Models module
from .schemas import HealthResponse, PoolStats, ProbeResult, ReadyResponse

__all__ = [
    "PoolStats",
    "ProbeResult",
    "HealthResponse",
    "ReadyResponse",
]

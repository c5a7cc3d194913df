"""
Startup connectivity probe.

The probe acquires one connection and releases it straight away. Its
outcome is logged and returned; it is only raised when the caller asks
for strict startup.
"""

import asyncio
import logging
from datetime import UTC, datetime

from ..config import ConnectionConfig
from ..models import ProbeResult
from .connection import DatabasePool, create_pool
from .exceptions import DatabaseUnavailableError

logger = logging.getLogger(__name__)


async def verify_connectivity(pool: DatabasePool, log: bool = True) -> ProbeResult:
    """
    Acquire and release one connection. Never raises on failure.

    With log=False the outcome is only returned, for repeated checks such
    as readiness polling.
    """
    missing = pool.config.missing_variables()
    if missing:
        detail = f"missing environment variables: {', '.join(missing)}"
        if log:
            logger.error("Error connecting to database: %s", detail)
        return ProbeResult(
            ok=False,
            detail=detail,
            missing=missing,
            timestamp=datetime.now(UTC),
        )

    try:
        async with pool.acquire():
            pass
    except Exception as e:
        detail = str(e) or type(e).__name__
        if log:
            logger.error("Error connecting to database: %s", detail)
        return ProbeResult(ok=False, detail=detail, timestamp=datetime.now(UTC))

    if log:
        logger.info("API database connected successfully")
    return ProbeResult(ok=True, timestamp=datetime.now(UTC))


def start_probe(pool: DatabasePool) -> asyncio.Task[ProbeResult]:
    """Run verify_connectivity in the background."""
    return asyncio.create_task(verify_connectivity(pool), name="db-connectivity-probe")


async def init_database(
    config: ConnectionConfig,
    strict: bool = False,
) -> tuple[DatabasePool, asyncio.Task[ProbeResult]]:
    """
    Create the pool and start the connectivity probe.

    By default the probe runs in the background and the pool is returned
    whatever its outcome. With strict=True the probe is awaited and a
    failure closes the pool and raises DatabaseUnavailableError.
    """
    pool = await create_pool(config)
    probe = start_probe(pool)

    if strict:
        result = await probe
        if not result.ok:
            await pool.close()
            raise DatabaseUnavailableError(result)

    return pool, probe

"""
Tests against a real database.
Run only when API_DB_HOST is set.
"""

import os

import pytest

from apidb.config import ConnectionConfig
from apidb.db import create_pool, verify_connectivity

pytestmark = [
    pytest.mark.anyio,
    pytest.mark.skipif(not os.environ.get("API_DB_HOST"), reason="API_DB_HOST not set"),
]


@pytest.fixture
async def live_pool():
    pool = await create_pool(ConnectionConfig())
    yield pool
    await pool.close()


async def test_probe_and_select(live_pool):
    """Test the probe passes and the pool serves a trivial query."""
    result = await verify_connectivity(live_pool)
    assert result.ok is True

    assert await live_pool.fetchval("SELECT 1") == 1


async def test_dates_returned_as_strings(live_pool):
    """Test date values come back unparsed."""
    value = await live_pool.fetchval("SELECT DATE '2024-02-29'")
    assert value == "2024-02-29"


async def test_acquire_release_baseline(live_pool):
    """Test two acquire/release cycles return counts to baseline."""
    for _ in range(2):
        conn = await live_pool.acquire()
        assert live_pool.stats().active == 1
        await live_pool.release(conn)

        stats = live_pool.stats()
        assert stats.active == 0
        assert stats.idle == stats.size


async def test_unreachable_host_still_returns_pool():
    """Test a bad port fails the probe without raising."""
    config = ConnectionConfig(port=1)
    pool = await create_pool(config)
    try:
        result = await verify_connectivity(pool)
        assert result.ok is False
    finally:
        await pool.close()

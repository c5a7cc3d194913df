"""
Pytest configuration and fixtures.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from apidb.config import ConnectionConfig
from apidb.db import DatabasePool, get_db_pool
from apidb.main import app

ENV_VARS = (
    "API_DB_HOST",
    "API_DB_USER",
    "API_DB_PASSWORD",
    "API_DB_DATABASE",
    "API_DB_PORT",
    "API_DB_WAIT_FOR_CONNECTIONS",
    "API_DB_QUEUE_LIMIT",
    "API_DB_CONNECTION_LIMIT",
    "API_DB_DATE_STRINGS",
)


@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any API_DB_* variables inherited from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_config():
    """Build a ConnectionConfig with test credentials, ignoring .env files."""
    def _make(**overrides) -> ConnectionConfig:
        values = {
            "host": "db.test",
            "user": "api",
            "password": "s3cret",
            "database": "api",
            "port": 5432,
        }
        values.update(overrides)
        return ConnectionConfig(_env_file=None, **values)
    return _make


@pytest.fixture
def driver_pool():
    """Mock asyncpg.Pool with ten slots and instant acquire/release."""
    mock_pool = MagicMock()
    mock_pool.get_max_size.return_value = 10
    mock_pool.get_size.return_value = 1
    mock_pool.get_idle_size.return_value = 1
    mock_pool.acquire = AsyncMock(side_effect=lambda timeout=None: AsyncMock(name="connection"))
    mock_pool.release = AsyncMock()
    mock_pool.close = AsyncMock()
    return mock_pool


@pytest.fixture
def db_pool(driver_pool, make_config):
    """DatabasePool wrapping the mock driver pool."""
    return DatabasePool(driver_pool, make_config())


@pytest.fixture
async def client():
    """Create an async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def override_pool():
    """Inject a pool into request handlers in place of app.state."""
    def _override(pool):
        app.dependency_overrides[get_db_pool] = lambda: pool
    yield _override
    app.dependency_overrides.pop(get_db_pool, None)

"""
Database connection management using asyncpg.
Provides the connection pool handed to the rest of the application.
"""

import logging
from collections.abc import Generator
from typing import Any

import asyncpg

from ..config import ConnectionConfig
from ..models import PoolStats
from .exceptions import PoolExhaustedError, QueueLimitError

logger = logging.getLogger(__name__)

# Types decoded as their server text representation when date_strings is on
DATE_TYPES = ("date", "timestamp", "timestamptz")


async def _use_date_strings(connection: asyncpg.Connection) -> None:
    """Return date and timestamp values as raw strings on this connection."""
    for typename in DATE_TYPES:
        await connection.set_type_codec(
            typename,
            schema="pg_catalog",
            encoder=str,
            decoder=str,
            format="text",
        )


class PoolAcquireContext:
    """
    Result of DatabasePool.acquire().

    Usable either as ``async with pool.acquire() as conn`` (released on
    exit) or as ``conn = await pool.acquire()`` followed by
    ``await pool.release(conn)``.
    """

    __slots__ = ("_pool", "_timeout", "_connection")

    def __init__(self, pool: "DatabasePool", timeout: float | None):
        self._pool = pool
        self._timeout = timeout
        self._connection: asyncpg.Connection | None = None

    def __await__(self) -> Generator[Any, None, asyncpg.Connection]:
        return self._pool._acquire(self._timeout).__await__()

    async def __aenter__(self) -> asyncpg.Connection:
        self._connection = await self._pool._acquire(self._timeout)
        return self._connection

    async def __aexit__(self, *exc_info) -> None:
        connection, self._connection = self._connection, None
        if connection is not None:
            await self._pool.release(connection)


class DatabasePool:
    """
    asyncpg pool with the acquire policy from ConnectionConfig.

    Every operation is a coroutine. Connection slots are tracked here so
    that wait_for_connections and queue_limit can be enforced before the
    request reaches the driver's own queue.
    """

    def __init__(self, pool: asyncpg.Pool, config: ConnectionConfig):
        self._pool = pool
        self._config = config
        self._checked_out: set[asyncpg.Connection] = set()
        self._pending = 0
        self._waiting = 0

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    @property
    def max_size(self) -> int:
        return self._pool.get_max_size()

    def acquire(self, *, timeout: float | None = None) -> PoolAcquireContext:
        """Acquire a connection from the pool."""
        return PoolAcquireContext(self, timeout)

    async def _acquire(self, timeout: float | None) -> asyncpg.Connection:
        queued = len(self._checked_out) + self._pending >= self.max_size
        if queued:
            if not self._config.wait_for_connections:
                raise PoolExhaustedError(
                    f"No free connection (max={self.max_size}) and waiting is disabled"
                )
            limit = self._config.queue_limit
            if limit and self._waiting >= limit:
                raise QueueLimitError(
                    f"Connection queue limit reached ({limit} waiting)"
                )
            self._waiting += 1

        self._pending += 1
        try:
            connection = await self._pool.acquire(timeout=timeout)
        finally:
            self._pending -= 1
            if queued:
                self._waiting -= 1

        self._checked_out.add(connection)
        return connection

    async def release(self, connection: asyncpg.Connection, *, timeout: float | None = None) -> None:
        """Return a connection to the pool. Releasing twice is a no-op."""
        try:
            await self._pool.release(connection, timeout=timeout)
        finally:
            self._checked_out.discard(connection)

    async def execute(self, query: str, *args, timeout: float | None = None) -> str:
        async with self.acquire() as conn:
            return await conn.execute(query, *args, timeout=timeout)

    async def fetch(self, query: str, *args, timeout: float | None = None) -> list[asyncpg.Record]:
        async with self.acquire() as conn:
            return await conn.fetch(query, *args, timeout=timeout)

    async def fetchrow(self, query: str, *args, timeout: float | None = None) -> asyncpg.Record | None:
        async with self.acquire() as conn:
            return await conn.fetchrow(query, *args, timeout=timeout)

    async def fetchval(self, query: str, *args, column: int = 0, timeout: float | None = None) -> Any:
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args, column=column, timeout=timeout)

    def stats(self) -> PoolStats:
        """Current connection counts."""
        return PoolStats(
            size=self._pool.get_size(),
            max_size=self.max_size,
            idle=self._pool.get_idle_size(),
            active=len(self._checked_out),
            waiting=self._waiting,
        )

    async def close(self) -> None:
        """Close the pool, waiting for connections to be released."""
        await self._pool.close()
        logger.info("Database connection pool closed")


async def create_pool(config: ConnectionConfig) -> DatabasePool:
    """
    Create the connection pool.

    No connection is opened here (min_size=0), so this succeeds even when
    the database is unreachable; use verify_connectivity() to find out.
    """
    missing = config.missing_variables()
    if missing:
        logger.warning(
            "Database variables not set, driver defaults apply: %s",
            ", ".join(missing),
        )

    kwargs: dict[str, Any] = config.dsn_params()
    kwargs["min_size"] = 0
    if config.connection_limit is not None:
        kwargs["max_size"] = config.connection_limit
    if config.date_strings:
        kwargs["init"] = _use_date_strings

    pool = await asyncpg.create_pool(**kwargs)
    logger.debug(
        "Database connection pool created (host=%s, max_size=%s)",
        config.host,
        pool.get_max_size(),
    )
    return DatabasePool(pool, config)

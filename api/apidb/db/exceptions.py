"""
Errors raised by the pool wrapper and the strict startup path.
Driver errors (asyncpg.PostgresError and friends) are not wrapped.
"""

from ..models import ProbeResult


class DatabaseError(Exception):
    """Base class for pool errors."""


class DatabaseUnavailableError(DatabaseError):
    """The startup probe failed and strict startup was requested."""

    def __init__(self, result: ProbeResult):
        self.result = result
        super().__init__(f"Database unavailable: {result.detail}")


class PoolExhaustedError(DatabaseError):
    """No free connection and the pool is configured not to wait."""


class QueueLimitError(DatabaseError):
    """Too many acquirers already waiting for a connection."""

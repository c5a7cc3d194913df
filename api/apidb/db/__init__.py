# Database module
from .connection import DatabasePool, create_pool
from .dependencies import get_db_pool
from .exceptions import (
    DatabaseError,
    DatabaseUnavailableError,
    PoolExhaustedError,
    QueueLimitError,
)
from .probe import init_database, start_probe, verify_connectivity

__all__ = [
    "DatabasePool",
    "create_pool",
    "verify_connectivity",
    "start_probe",
    "init_database",
    "get_db_pool",
    "DatabaseError",
    "DatabaseUnavailableError",
    "PoolExhaustedError",
    "QueueLimitError",
]

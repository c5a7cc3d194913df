"""
FastAPI dependencies for reaching the pool created at startup.
"""

from fastapi import HTTPException, Request

from .connection import DatabasePool


def get_db_pool(request: Request) -> DatabasePool:
    """Return the pool stored on the application state by the lifespan."""
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise HTTPException(status_code=503, detail="Database pool not initialized")
    return pool

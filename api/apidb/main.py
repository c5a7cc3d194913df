"""
API Database Pool

A FastAPI application that creates the database connection pool at
startup, verifies connectivity once, and hands the pool to request
handlers through dependency injection.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import get_connection_config, get_settings
from .db import init_database
from .logging_config import setup_logging
from .routers import health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    Creates the database pool on startup and closes it on shutdown.
    """
    settings = get_settings()
    setup_logging(settings.log_level, json_format=settings.log_json)

    # Startup: the probe runs in the background unless strict_startup is set
    pool, probe = await init_database(
        get_connection_config(),
        strict=settings.strict_startup,
    )
    app.state.db_pool = pool
    app.state.db_probe = probe

    yield

    # Shutdown: close database connection pool
    if not probe.done():
        probe.cancel()
    await pool.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
## API Database Pool

Connection pool for the API database, configured from `API_DB_*`
environment variables.

### Features
- **Startup probe**: one connection is acquired and released at startup
- **Health Checks**: Liveness and readiness endpoints
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(health_router)

    return app


# Create app instance
app = create_app()


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint lists the available endpoints."""
    return {
        "message": get_settings().app_name,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
    }

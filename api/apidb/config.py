"""
Application configuration using pydantic-settings.
Environment variables are loaded automatically.
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings

# Variables that must be set for the pool to reach the database.
REQUIRED_VARIABLES = {
    "host": "API_DB_HOST",
    "user": "API_DB_USER",
    "password": "API_DB_PASSWORD",
    "database": "API_DB_DATABASE",
    "port": "API_DB_PORT",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "API Database Pool"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = False

    # Fail startup when the connectivity probe fails
    strict_startup: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


class ConnectionConfig(BaseSettings):
    """
    Database connection parameters, read once from API_DB_* variables.

    None of the connection fields are validated as present: an unset
    variable shows up as a failed connectivity probe, not a startup crash.
    """

    host: str | None = None
    user: str | None = None
    password: SecretStr | None = None
    database: str | None = None
    port: int | None = None

    # Pool behaviour
    wait_for_connections: bool = True
    queue_limit: int = Field(0, ge=0)  # 0 = unbounded
    connection_limit: int | None = Field(None, ge=1)  # None = driver default
    date_strings: bool = True

    class Config:
        env_prefix = "API_DB_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_ignore_empty = True
        case_sensitive = False
        extra = "ignore"
        frozen = True

    def missing_variables(self) -> list[str]:
        """Names of the required environment variables that are not set."""
        return [
            env_name
            for field, env_name in REQUIRED_VARIABLES.items()
            if getattr(self, field) is None
        ]

    def dsn_params(self) -> dict[str, Any]:
        """
        Keyword arguments for the driver, unset values omitted.

        asyncpg fills omitted values from its own defaults (PG* variables,
        localhost), so queries may still reach a server when
        missing_variables() is not empty.
        """
        params = {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "database": self.database,
        }
        if self.password is not None:
            params["password"] = self.password.get_secret_value()
        return {key: value for key, value in params.items() if value is not None}


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_connection_config() -> ConnectionConfig:
    """Get cached database connection config."""
    return ConnectionConfig()

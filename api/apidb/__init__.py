"""Database connection pool for the API, configured from API_DB_* variables."""

__version__ = "1.0.0"

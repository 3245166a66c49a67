"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

WHY Pydantic Settings?
======================
1. Type Safety: All configuration values are validated against their types
2. Environment Variables: Automatically loads from environment variables
3. .env Support: Can load from .env files for local development
4. Validation: Catches configuration errors at startup, not runtime

Database credentials come from the classic DB_HOST / DB_PORT / DB_USER /
DB_PASSWORD / DB_DATABASE variables. DATABASE_URL, when set, overrides them
(handy for tests and for pointing at a non-MySQL database).

Usage:
    from bookshelf.config import get_settings

    settings = get_settings()
    print(settings.database_url)
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field maps to the upper-case environment variable of the same
    name (DB_HOST -> db_host). Lookup is case-insensitive.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Bookshelf API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (SQL echo, auto-reload)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    api_port: int = Field(
        default=3001,
        description="Port to bind the server to"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    db_host: str = Field(default="localhost", description="Database host")
    db_port: int = Field(default=3306, description="Database port")
    db_user: str = Field(default="root", description="Database user")
    db_password: str = Field(default="", description="Database password")
    db_database: str = Field(default="bookshelf", description="Database name")
    db_driver: str = Field(
        default="mysql+aiomysql",
        description="SQLAlchemy async dialect+driver used with the DB_* values"
    )
    database_url_override: Optional[str] = Field(
        default=None,
        alias="database_url",
        description="Full database URL, takes precedence over the DB_* values"
    )
    db_pool_size: int = Field(
        default=10,
        gt=0,
        description="Maximum number of pooled database connections"
    )
    db_pool_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds a request waits for a free connection before failing"
    )
    init_db_on_startup: bool = Field(
        default=True,
        description="Create the books table (if missing) when the app starts"
    )

    # -------------------------------------------------------------------------
    # HTTP Settings
    # -------------------------------------------------------------------------
    allowed_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def database_url(self) -> str:
        """
        Resolve the SQLAlchemy URL for the async engine.

        Returns DATABASE_URL verbatim when it is set, otherwise builds one
        from the DB_* settings. URL.create escapes special characters in
        the password.
        """
        if self.database_url_override:
            return self.database_url_override
        url = URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )
        return url.render_as_string(hide_password=False)

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("db_driver")
    @classmethod
    def validate_db_driver(cls, v: str) -> str:
        """The engine is async, so the driver must name an async DBAPI."""
        if "+" not in v:
            raise ValueError(
                "db_driver must include an async DBAPI, e.g. 'mysql+aiomysql'"
            )
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    lru_cache makes this a process-wide singleton: the environment and
    .env are read once. Tests call get_settings.cache_clear() after
    changing environment variables.
    """
    return Settings()

# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for the knobs that are not CLI options: logging,
# SQL echo and the connection pool cap.
# ==============================================================================

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ticketdb.core.constants import DatabaseConstants


class DatabaseType(str, Enum):
    """
    Supported database backends.

    This is the tag of the database handle: every handle is exactly one
    of these variants for its whole lifetime.

    Attributes:
        SQLITE: Local file (or in-memory) database through aiosqlite
        POSTGRESQL: Server database through asyncpg
    """
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


class Settings(BaseSettings):
    """
    Application Settings Configuration.

    Loaded from environment variables and an optional ``.env`` file.
    Obtain it through :func:`get_settings` and pass it explicitly to the
    code that needs it.

    Attributes:
        APP_NAME: Name used in log lines
        DEBUG: Echo every SQL statement through the SQLAlchemy logger
        LOG_LEVEL: Base logging level (raised by -v on the command line)
        LOG_FORMAT: ``text`` or ``json`` log lines
        DB_POOL_SIZE: Maximum concurrent connections per pool

    Example:
        >>> from ticketdb.core.settings import get_settings
        >>> get_settings().DB_POOL_SIZE
        5
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(
        default="ticketdb",
        description="Application display name"
    )
    DEBUG: bool = Field(
        default=False,
        description="Echo SQL statements"
    )

    # --------------------------------------------------------------------------
    # CONNECTION POOL SETTINGS
    # --------------------------------------------------------------------------
    DB_POOL_SIZE: int = Field(
        default=DatabaseConstants.DEFAULT_POOL_SIZE,
        ge=1,
        le=100,
        description="Maximum concurrent connections in the pool"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_FORMAT: Literal["json", "text"] = Field(
        default="text",
        description="Log format (json, text)"
    )

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Uses lru_cache so the environment is only read once per process.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()

"""
Centralized configuration management using Pydantic Settings.

Settings are loaded from environment variables and an optional .env file.
Only the storage location and logging knobs are configurable; everything
else about the store (schema, statements) is fixed in code.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ASYNC_SQLITE_SCHEME = "sqlite+aiosqlite"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    (DATABASE_URL, SQL_ECHO, LOG_LEVEL, LOG_JSON).
    """

    # Database Configuration (SQLite)
    database_url: str = Field(
        default=f"{ASYNC_SQLITE_SCHEME}:///./fake-store.sqlite3",
        description="SQLite database URL; a file path or :memory:"
    )
    sql_echo: bool = Field(
        default=False,
        description="Echo every SQL statement through the sqlalchemy.engine logger"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(
        default=True,
        description="Emit structured JSON log lines instead of plain text"
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """
        Validate database URL format.

        Only the embedded SQLite engine is supported. A plain ``sqlite://``
        URL is upgraded to the async driver so the executor can await it.
        """
        if not v or v.strip() == "":
            raise ValueError("DATABASE_URL is required and cannot be empty")

        v = v.strip()
        if v.startswith(f"{ASYNC_SQLITE_SCHEME}://"):
            return v
        if v.startswith("sqlite://"):
            return ASYNC_SQLITE_SCHEME + v[len("sqlite"):]

        raise ValueError(
            f"DATABASE_URL must start with one of: sqlite, {ASYNC_SQLITE_SCHEME}. "
            f"Got: {v[:20]}..."
        )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got: {v}")
        return level


# Global settings instance
settings = Settings()

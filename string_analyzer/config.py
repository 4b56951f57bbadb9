"""
String Analyzer Service - Application Configuration
===================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py (app factory), __main__.py (server entry point)
       and the store factory.
When:  Loaded once at module import time.

Environment variables (case-insensitive):
    PORT             Listening port (default 3000)
    HOST             Bind address (default 0.0.0.0)
    STORAGE_BACKEND  "json" (default) or "sql"
    DATA_FILE        JSON document used by the json backend (default db.json)
    DATABASE_URL     SQLAlchemy async URL used by the sql backend
    CORS_ORIGINS     Comma-separated allowed origins (default "*")
    LOG_LEVEL        DEBUG, INFO, WARNING, ERROR or CRITICAL
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development, so the
    service starts with no configuration at all.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # ── Persistence ───────────────────────────────────────────────────────
    # What: Which PersistenceBackend the store writes through to
    # json: one JSON document rewritten on every mutation
    # sql:  one SQL table rewritten in a transaction on every mutation
    storage_backend: str = Field(default="json")

    data_file: str = Field(
        default="db.json",
        description="Path of the JSON document holding {strings: [...]}",
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./strings.db",
        description="Async SQLAlchemy connection URL for the sql backend",
    )

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Ensures the backend name is one we know how to build."""
        valid = {"json", "sql"}
        lower = v.lower()
        if lower not in valid:
            raise ValueError(f"Invalid storage_backend '{v}'. Must be one of: {valid}")
        return lower

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance - imported throughout the application
settings = Settings()

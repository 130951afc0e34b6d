"""
Todos API: Application Configuration
=====================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py (server address, logging, CORS).
When:  Loaded once at module import time.

The mock server needs very little configuration: where to listen, how loudly
to log, and which browser origins may call it. Every value has a default that
matches a local development setup, so the server runs with no .env at all.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    # What: Address uvicorn binds to when started through `todos-api`
    # Default port 3001 keeps the mock clear of front-end dev servers on 3000
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=3001, ge=1024, le=65535)

    # What: Verbosity of the request/mutation log
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
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

    # ── CORS ──────────────────────────────────────────────────────────────
    # What: Allowed origins for cross-origin requests
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into the list CORSMiddleware expects."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # BACKEND_PORT and backend_port both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()

import json
import os
import sys
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    For local development, load `.env` automatically so `SECRET_KEY` can be
    provided from `backend/.env`. **SECRET_KEY remains required** and must be
    set in production via environment variables.

    Do NOT auto-load `.env` when running under pytest or in CI (so tests
    that validate missing secrets continue to fail fast).
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


class Settings(BaseSettings):
    # Environment configuration
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', 'production' or 'test'",
    )

    DATABASE_URL: str = "sqlite:///./data/citizen_pulse.db"
    SECRET_KEY: str = Field(
        ...,  # Required, no default
        description="JWT secret key - must be set via SECRET_KEY environment variable",
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins (comma-separated in env var)",
    )

    # Admin credentials for initial setup (used by init_db.py)
    ADMIN_EMAIL: str = Field(
        ...,  # Required, no default
        description="Admin email - must be set via ADMIN_EMAIL environment variable",
    )
    ADMIN_PASSWORD: str = Field(
        ...,  # Required, no default
        description="Admin password - must be set via ADMIN_PASSWORD environment variable",
    )

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(
        default=5,
        description="Number of persistent connections in pool",
    )
    DB_MAX_OVERFLOW: int = Field(
        default=10,
        description="Extra connections when pool exhausted",
    )
    DB_POOL_TIMEOUT: int = Field(
        default=30,
        description="Seconds to wait for connection from pool",
    )
    DB_POOL_RECYCLE: int = Field(
        default=1800,
        description="Recycle connections after N seconds (30 min default)",
    )

    AUTO_CREATE_DB: bool = Field(
        default=False,
        description="When true (development only), call Base.metadata.create_all on startup",
    )

    SLOW_REQUEST_THRESHOLD: float = Field(
        default=1.0,
        description="Log warning for requests slower than this (seconds)",
    )

    # Feed and admin console
    FEED_DEFAULT_LIMIT: int = Field(
        default=50,
        description="Number of reports returned by the public feed when no limit is given",
    )
    ADMIN_PAGE_SIZE: int = Field(
        default=20,
        description="Rows per page in the admin report and user listings",
    )

    # Reports
    REPORT_NUMBER_PREFIX: str = Field(
        default="CP",
        description="Prefix of human-readable report numbers (e.g. CP-000042)",
    )
    REPORT_SUBMISSION_RATE_LIMIT: str = Field(
        default="10/minute",
        description="slowapi rate limit applied to report submission per client",
    )
    VIEW_COOKIE_NAME: str = Field(
        default="cp_viewed",
        description="Session cookie tracking which reports this browser already viewed",
    )

    PROJECT_NAME: str = Field(
        default="Citizen Pulse",
        description="Project name used in API title and root endpoint",
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | List[str]) -> List[str]:
        """Parse CORS origins from a JSON list or a comma-separated string."""
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars (e.g., SENTRY_DSN) without validation errors
    )


# Instantiating Settings() raises pydantic.ValidationError if SECRET_KEY isn't set.
settings = Settings()  # type: ignore[call-arg]


def get_settings() -> Settings:
    """Get the settings instance (for dependency injection)."""
    return settings

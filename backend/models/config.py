import os
import sys
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    Local development picks up `backend/.env` automatically. Under pytest or
    in CI the file is ignored so that tests run against explicit environment
    variables only.
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


DEFAULT_WARDS = [
    "Lindi",
    "Laini Saba",
    "Makina",
    "Woodley/Kenyatta Golf Course",
    "Sarang'ombe",
]


class Settings(BaseSettings):
    # Environment configuration
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', 'production' or 'test'",
    )

    DATABASE_URL: str = "sqlite:///./data/wardwatch.db"
    SECRET_KEY: str = Field(
        ...,  # Required, no default
        description="JWT secret key - must be set via SECRET_KEY environment variable",
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins (comma-separated in env var)",
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

    # Schema is owned by alembic; create_all is a development shortcut only
    AUTO_CREATE_DB: bool = Field(
        default=False,
        description="When true (development only), call Base.metadata.create_all on startup",
    )

    SLOW_REQUEST_THRESHOLD: float = Field(
        default=1.0,
        description="Log warning for requests slower than this (seconds)",
    )

    # Ward targeting
    WARDS: Annotated[List[str], NoDecode] = Field(
        default=DEFAULT_WARDS,
        description="Known wards (comma-separated in env var). Empty disables the check.",
    )

    # Bootstrap admin account, created by init_db.py
    ADMIN_EMAIL: str | None = Field(
        default=None,
        description="Email of the admin account seeded by init_db.py",
    )
    ADMIN_PASSWORD: str | None = Field(
        default=None,
        description="Password of the seeded admin account",
    )
    ADMIN_WARD: str = Field(
        default="all",
        description="Ward recorded on the seeded admin account",
    )

    # Report listing
    REPORTS_PAGE_SIZE: int = Field(
        default=10,
        description="Default page size for report listings",
    )
    REPORTS_MAX_PAGE_SIZE: int = Field(
        default=100,
        description="Largest page size a caller may request",
    )
    RECENT_REPORTS_LIMIT: int = Field(
        default=5,
        description="Number of reports shown in the dashboard 'recent' list",
    )

    # Dashboard statistics
    STATS_WINDOW_DAYS: int = Field(
        default=7,
        description="Length of the trailing window used for new-report deltas",
    )
    REPORTS_OVER_TIME_DEFAULT_DAYS: int = Field(
        default=30,
        description="Default look-back for the reports-over-time series",
    )

    @field_validator("CORS_ORIGINS", "WARDS", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | List[str]) -> List[str]:
        """Parse list settings from comma-separated strings."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars (e.g., SENTRY_DSN) without validation errors
    )


# Instantiating Settings() raises pydantic.ValidationError if SECRET_KEY is missing.
settings = Settings()  # type: ignore[call-arg]


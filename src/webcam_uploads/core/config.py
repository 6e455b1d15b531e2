"""Runtime configuration read from the process environment."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from webcam_uploads.core.constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_UPLOAD_DIR,
    PRODUCTION_ENV,
)


def _get_env_bool(name: str, *, default: bool = False) -> bool:
    """Convert an environment variable to bool."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(name: str, default: int) -> int:
    """Convert an environment variable to int, falling back on bad values."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> list[str]:
    """Convert an environment variable like 'a,b,c' to a list."""
    value = os.environ.get(name)
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseModel):
    """Service settings."""

    upload_dir: Path = Field(default=Path(DEFAULT_UPLOAD_DIR), description="Storage directory")
    host: str = Field(default=DEFAULT_HOST, description="Bind address")
    port: int = Field(default=DEFAULT_PORT, description="Listening port")
    environment: str = Field(default="development", description="Deployment environment")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")
    rate_limit_enabled: bool = Field(default=True, description="Upload rate limiting")
    verify_image_content: bool = Field(
        default=False,
        description="Sniff uploaded bytes with Pillow before storing",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    @property
    def is_production(self) -> bool:
        """Whether internal error details must be hidden from clients."""
        return self.environment.strip().lower() == PRODUCTION_ENV

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            upload_dir=Path(os.environ.get("UPLOAD_DIR", DEFAULT_UPLOAD_DIR)),
            host=os.environ.get("HOST", DEFAULT_HOST),
            port=_get_env_int("PORT", DEFAULT_PORT),
            environment=os.environ.get("APP_ENV", "development"),
            cors_origins=_get_env_list("CORS_ORIGINS", ["*"]),
            rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", default=True),
            verify_image_content=_get_env_bool("VERIFY_IMAGE_CONTENT"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )

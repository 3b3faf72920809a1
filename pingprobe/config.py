"""Service configuration via pydantic-settings.

Load the ping service settings from environment variables and/or a `.env`
file. Only the HTTP surface reads these; the core controller takes plain
constructor arguments.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service-wide configuration settings.

    Attributes:
        PROJECT_NAME: Display name for the application.
        VERSION: Semantic version string.
        ENVIRONMENT: Deployment environment identifier.
        LOG_LEVEL: Minimum logging verbosity level.
        LOGGING_NOISY_MODULES: Loggers capped at WARNING.
        PING_PATH: Route the ping endpoint is mounted at.
        PING_CHECK: Optional ``"module:callable"`` path of the health check.
        PING_EXPIRES_HTTP10_ONLY: Only send ``Expires: 0`` to HTTP/1.0 clients.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # ==========================================================================
    # PROJECT METADATA
    # ==========================================================================
    PROJECT_NAME: str = "pingprobe"
    VERSION: str = "0.1.0"

    # ==========================================================================
    # ENVIRONMENT & LOGGING
    # ==========================================================================
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: Literal["debug", "info", "warning", "error", "critical"] = "info"
    LOGGING_NOISY_MODULES: list[str] = [
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "asyncio",
    ]

    # ==========================================================================
    # PING ENDPOINT
    # ==========================================================================
    PING_PATH: str = "/ping"
    PING_CHECK: Optional[str] = None
    PING_EXPIRES_HTTP10_ONLY: bool = False

    @field_validator("PING_PATH")
    @classmethod
    def validate_ping_path(cls, v: str) -> str:
        """Require an absolute route path.

        Raises:
            ValueError: If the path does not start with ``/``.
        """
        if not v.startswith("/"):
            raise ValueError(f"PING_PATH must start with '/', got '{v}'")
        return v

    @field_validator("PING_CHECK")
    @classmethod
    def validate_ping_check(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty check path as no check at all."""
        if v is not None and not v.strip():
            return None
        return v


# ==============================================================================
# DEPENDENCY INJECTION
# ==============================================================================


@lru_cache()
def get_settings() -> Settings:
    """Return a cached singleton instance of the service settings.

    Returns:
        The singleton Settings instance.
    """
    return Settings()

"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        app_mode: Run mode, "debug" or "release". Also read from GIN_MODE.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        frontend_url: Allowed CORS origin.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit: Per-client request budget, e.g. "60/minute".
        rate_limit_max_buckets: Bucket count above which expired buckets are swept.
        jwt_secret: Secret used to sign and verify bearer tokens.
        jwt_algorithm: JWT signing algorithm.
        jwt_expiry_hours: Lifetime of issued tokens.
        uploads_dir: Directory served under /uploads.
        admin_email: Optional bootstrap administrator account.
        admin_password: Password for the bootstrap administrator.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "Srecha Invoice API"
    version: str = "1.0.0"
    app_mode: Literal["debug", "release"] = Field(
        default="debug", validation_alias=AliasChoices("app_mode", "gin_mode")
    )
    host: str = "0.0.0.0"
    port: int = 3000
    frontend_url: str = "http://localhost:8080"
    log_level: str = "INFO"

    rate_limit: str = "60/minute"
    rate_limit_max_buckets: int = 10_000

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    uploads_dir: str = "./uploads"

    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    @property
    def debug(self) -> bool:
        """True when running in debug mode."""
        return self.app_mode == "debug"

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()

"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskgate.core.constants import DEFAULT_LANDING_ROUTE, DEFAULT_LOGIN_ROUTE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Task Manager Access"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Routing
    landing_route: str = DEFAULT_LANDING_ROUTE
    login_route: str = DEFAULT_LOGIN_ROUTE

    # Permissions
    strict_permission_catalog: bool = False
    navigation_config: Path | None = None

    # API Documentation
    api_docs_base_url: str = "https://api.example.com"

    # Observability
    log_level: str = "INFO"

    @field_validator("landing_route", "login_route")
    @classmethod
    def validate_route(cls, v: str) -> str:
        """Ensure configured routes are absolute paths.

        Raises:
            ValueError: If the route does not start with "/"
        """
        if not v.startswith("/"):
            raise ValueError(f"Route must be an absolute path, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_landing_route(self) -> "Settings":
        """Keep the landing route inside the authenticated app.

        An under-permissioned user is redirected within the app, never logged out.
        """
        if self.landing_route == self.login_route:
            raise ValueError("LANDING_ROUTE cannot be the login route")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()

"""
Environment configuration for the card scanner (pydantic-settings).

This covers deployment-level values: Gemini endpoint and model, timeouts,
where the YAML store lives, Sentry. Per-user values (sheet URL, tab, column,
the user's own API key) are ScannerSettings in the store, not here.

    from backend.settings import get_settings

    settings = get_settings()
    settings.gemini_model  # "gemini-3-pro-preview"
"""

import pathlib
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # -------------------------------------------------------------------------
    # Vision Model - Gemini
    # -------------------------------------------------------------------------
    gemini_api_key: Optional[str] = Field(
        default=None,
        description="Gemini API key (a key saved in the scanner settings takes precedence)",
    )
    gemini_model: str = Field(
        default="gemini-3-pro-preview",
        description="Gemini model used to read card names",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Gemini REST API",
    )
    vision_max_output_tokens: int = Field(
        default=8192,
        ge=1,
        description="Output token budget; the model's thinking tokens count against it",
    )
    vision_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Timeout in seconds for a vision request",
    )

    # -------------------------------------------------------------------------
    # Missing List - Google Sheets
    # -------------------------------------------------------------------------
    sheets_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for fetching the missing-list sheet",
    )

    # -------------------------------------------------------------------------
    # Local Storage
    # -------------------------------------------------------------------------
    scanner_store_path: pathlib.Path = Field(
        default=pathlib.Path.home() / ".card-scanner" / "store.yaml",
        description="YAML file holding saved settings and the missing list",
    )

    # -------------------------------------------------------------------------
    # HTTP API
    # -------------------------------------------------------------------------
    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated front-end origins allowed in addition to local dev servers",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse extra CORS origins into a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("scanner_store_path")
    @classmethod
    def expand_store_path(cls, v: pathlib.Path) -> pathlib.Path:
        """Allow ~ in SCANNER_STORE_PATH."""
        return pathlib.Path(v).expanduser()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()

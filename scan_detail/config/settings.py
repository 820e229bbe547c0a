"""
Application settings using Pydantic Settings.
"""

import logging
from functools import lru_cache
from typing import Literal

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCAN_DETAIL_",
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "staging", "prod"] = "dev"

    # Result display
    no_results_text: str = Field("No results found", description="Shown when a lookup is empty")
    symbology_placeholder: str = Field(
        "Barcode type", description="Index 0 entry of the symbology selection list"
    )

    # Barcode generation
    display_density: int = Field(1, ge=1, description="Screen density multiplier")
    barcode_density_scale: int = Field(3, ge=1, description="Barcode density per density unit")

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] | None = Field(
        None, description="Log renderer; defaults to json in production and text elsewhere"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "prod"

    @property
    def json_logs(self) -> bool:
        """Whether logs are rendered as JSON."""
        if self.log_format is None:
            return self.is_production
        return self.log_format == "json"

    @property
    def barcode_density(self) -> int:
        """Density passed to the create barcode endpoint."""
        return self.display_density * self.barcode_density_scale


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog output from settings."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

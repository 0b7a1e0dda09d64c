"""Application configuration settings."""

from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fixed shortcode bounds; not configurable.
MIN_SHORTCODE_LENGTH = 4
MAX_SHORTCODE_LENGTH = 10


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EPHEMERAL_LINKS_",
        env_file=".env",
        extra="ignore",
    )

    # Application
    app_title: str = "Ephemeral Links"
    app_version: str = "0.1.0"
    app_description: str = "Session-scoped URL shortener with expiring links"
    base_url: Optional[str] = None
    log_level: str = "INFO"

    # Shortcodes
    generated_code_length: int = Field(6, ge=MIN_SHORTCODE_LENGTH, le=MAX_SHORTCODE_LENGTH)
    max_generation_attempts: int = 100

    # Expiry
    default_validity_minutes: int = 30
    sweep_interval_seconds: float = 60.0

    # Redirects
    redirect_delay_ms: int = 500
    redirect_schemes: list[str] = ["http", "https"]

    # Event log
    event_log_max_entries: Optional[int] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()

"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.models import TimeGridConfig


class Settings(BaseSettings):
    """Settings are read from the environment (or a local .env file).

    Grid defaults mirror the visible range of the weekly schedule screen.
    """

    # Schedule Service
    schedule_service_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the Schedule Service REST API",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for each Schedule Service request",
    )

    # Grid
    grid_first_slot_start: str = "07:00"
    grid_last_slot_end: str = "15:00"
    grid_pixels_per_hour: float = Field(default=60, gt=0, allow_inf_nan=False)
    content_min_height_px: float = Field(
        default=90,
        description="Height a block needs to show subject, teacher and time",
    )
    content_min_height_with_actions_px: float = Field(
        default=110,
        description="Height a block needs when edit/delete buttons are shown",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = SettingsConfigDict(
        env_prefix="SCHEDULE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def grid_config(self) -> TimeGridConfig:
        return TimeGridConfig(
            first_slot_start=self.grid_first_slot_start,
            last_slot_end=self.grid_last_slot_end,
            pixels_per_hour=self.grid_pixels_per_hour,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings instance, creating it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

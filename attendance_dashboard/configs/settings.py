"""Centralized settings management for the attendance dashboard."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings powered by pydantic-settings.

    Loads configuration from environment variables and a .env file located
    at the project root.
    """

    # -------------------------------------------------------------------------
    # ENVIRONMENT
    # -------------------------------------------------------------------------
    ENV: str = "development"
    DEBUG: bool = False

    # -------------------------------------------------------------------------
    # DATE HANDLING
    # -------------------------------------------------------------------------
    # Every date cell is interpreted and re-emitted in this zone.
    TIMEZONE: str = "Asia/Kolkata"

    # -------------------------------------------------------------------------
    # SOURCE TABLE
    # -------------------------------------------------------------------------
    SOURCE_PATH: Path | None = None
    SHEET_NAME: str = "Dashboard"
    HEADER_ROWS: int = Field(default=1, ge=0)

    # -------------------------------------------------------------------------
    # LOGGING
    # -------------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # -------------------------------------------------------------------------
    # PATHS
    # -------------------------------------------------------------------------
    # BASE_DIR points to the attendance_dashboard package
    BASE_DIR: Path = Path(__file__).resolve().parents[1]

    DASHBOARD_CONFIG_PATH: Path = BASE_DIR / "configs" / "dashboard.yaml"

    # -------------------------------------------------------------------------
    # CONFIGURATION
    # -------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        env_file_encoding="utf-8",
        # Allow extra fields in .env but ignore them in the model
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns
    -------
    Settings
        The singleton settings instance.
    """
    return Settings()

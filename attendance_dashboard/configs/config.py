"""Configuration loader for the attendance dashboard."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from attendance_dashboard.configs.settings import Settings, get_settings
from attendance_dashboard.errors import ConfigError
from attendance_dashboard.schemas.dashboard_config import DashboardConfig


class Config:
    """Configuration for the attendance dashboard."""

    @classmethod
    def load_dashboard_config(
        cls,
        path: Path | str | None = None,
        settings: Settings | None = None,
    ) -> DashboardConfig:
        """
        Load the YAML dashboard configuration.

        Placeholders like ${TIMEZONE} are substituted from settings before
        the YAML is parsed.
        """
        settings = settings or get_settings()
        config_path = Path(path) if path else settings.DASHBOARD_CONFIG_PATH
        if not config_path.exists():
            raise FileNotFoundError(f"Missing config at {config_path}")

        with open(config_path, encoding="utf-8") as f:
            content = f.read()

        for key, value in settings.model_dump().items():
            placeholder = f"${{{key}}}"
            if placeholder in content:
                content = content.replace(placeholder, str(value))

        try:
            raw = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config at {config_path} must be a mapping")

        try:
            return DashboardConfig(**raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid dashboard config {config_path}: {e}") from e

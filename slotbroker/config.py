"""
Configuration management using Pydantic models, YAML and environment variables.
"""

from __future__ import annotations

import os
from datetime import time
from pathlib import Path
from typing import Any, Dict, Optional

import pendulum
import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import ConfigurationError

ENV_API_TOKEN = "CALENDLY_API_TOKEN"
ENV_DEFAULT_TIMEZONE = "DEFAULT_TIMEZONE"


class CalendlyConfig(BaseModel):
    """Calendar provider connection settings."""
    api_token: str = ""
    base_url: str = "https://api.calendly.com"
    timeout_seconds: float = 30.0

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def require_token(self) -> str:
        """Return the API token or fail if it was never configured."""
        if not self.api_token:
            raise ConfigurationError(
                f"Calendly integration not configured: {ENV_API_TOKEN} is missing"
            )
        return self.api_token


class SchedulingConfig(BaseModel):
    """Business hours and clamping rules for availability windows."""
    workday_start_hour: int = 9
    workday_end_hour: int = 17
    safety_buffer_minutes: int = 5
    lead_time_hours: int = 3
    weekend_rollover_hours: int = 12
    slot_duration_minutes: int = 30

    @field_validator("workday_start_hour", "workday_end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("slot_duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure slot duration is positive."""
        if value <= 0:
            raise ValueError("slot_duration_minutes must be greater than zero")
        return value

    @field_validator("safety_buffer_minutes", "lead_time_hours", "weekend_rollover_hours")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("buffers must not be negative")
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "SchedulingConfig":
        """Ensure the workday opens before it closes."""
        if self.workday_end_hour <= self.workday_start_hour:
            raise ValueError("workday_end_hour must be later than workday_start_hour")
        return self

    def get_workday_start(self) -> time:
        return time(hour=self.workday_start_hour, minute=0)

    def get_workday_end(self) -> time:
        return time(hour=self.workday_end_hour, minute=0)


class AppConfig(BaseModel):
    """Application configuration."""
    calendly: CalendlyConfig = Field(default_factory=CalendlyConfig)
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    default_timezone: str = "UTC"

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject zone names pendulum does not know."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file, then apply environment overrides.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        return cls._build(data)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a configuration from environment variables alone."""
        return cls._build({})

    @classmethod
    def _build(cls, data: Dict[str, Any]) -> "AppConfig":
        data = _apply_env_overrides(data)
        try:
            return cls(**data)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Environment variables win over values from the config file."""
    merged = dict(data)

    token = os.environ.get(ENV_API_TOKEN)
    if token:
        calendly = dict(merged.get("calendly") or {})
        calendly["api_token"] = token
        merged["calendly"] = calendly

    default_timezone = os.environ.get(ENV_DEFAULT_TIMEZONE)
    if default_timezone:
        merged["default_timezone"] = default_timezone

    return merged


def load_config(config_path: Optional[Path] = None, env_path: Optional[Path] = None) -> AppConfig:
    """
    Load the application configuration.

    Reads ``.env`` first, then the YAML file if one exists. Without a file the
    configuration comes from the environment only.
    """
    if env_path:
        load_dotenv(env_path)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    path = config_path or get_default_config_path()
    if config_path is None and not path.exists():
        return AppConfig.from_env()

    return AppConfig.load_from_yaml(path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path

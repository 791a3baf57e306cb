"""Configuration management for mediamatch.

Loads configuration from YAML files and environment variables using Pydantic.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from mediamatch.values import MediaValues

DEFAULT_CONFIG_PATH = Path("mediamatch.yaml")


class UnitsConfig(BaseModel):
    """Configuration for unit conversion."""

    root_font_size: float = Field(
        default=16.0,
        gt=0,
        le=1000,
        description="Font size in px that em and rem lengths are resolved against",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="console", description="Log format (console or json)")
    file: Path | None = Field(default=None, description="Optional log file path")

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if isinstance(v, str):
            v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v

    @field_validator("format", mode="before")
    @classmethod
    def validate_format(cls, v: Any) -> str:
        """Validate log format."""
        if isinstance(v, str):
            v = v.lower()
        if v not in {"console", "json"}:
            raise ValueError(f"Invalid log format: {v}")
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MEDIAMATCH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    units: UnitsConfig = Field(default_factory=UnitsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    environments: dict[str, MediaValues] = Field(
        default_factory=dict,
        description="Named environments (value bags) to match queries against",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Let environment variables override values passed in from YAML."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Dictionary containing the configuration.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        yaml.YAMLError: If the YAML is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        config = yaml.safe_load(f)

    return config or {}


_RE_ENV_VAR = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(config: Any) -> Any:
    """Recursively expand ``${VAR_NAME}`` references in configuration values.

    Unset variables expand to an empty string.
    """
    if isinstance(config, str):
        return _RE_ENV_VAR.sub(lambda m: os.environ.get(m.group(1), ""), config)
    if isinstance(config, dict):
        return {k: expand_env_vars(v) for k, v in config.items()}
    if isinstance(config, list):
        return [expand_env_vars(item) for item in config]
    return config


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from a YAML file and environment variables.

    Environment variables take precedence over YAML configuration.

    Args:
        config_path: Optional path to YAML config file. If not provided,
                    looks for mediamatch.yaml in the current directory.

    Returns:
        Validated Settings object.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    yaml_config: dict[str, Any] = {}
    if config_path.exists():
        yaml_config = expand_env_vars(load_yaml_config(config_path))

    return Settings(**yaml_config)


# Global settings instance (lazy-loaded)
_settings: Settings | None = None


def get_settings(config_path: Path | None = None, reload: bool = False) -> Settings:
    """Get the global settings instance.

    Args:
        config_path: Optional path to config file for initial load.
        reload: Force reload of settings.

    Returns:
        The global Settings instance.
    """
    global _settings
    if _settings is None or reload:
        _settings = load_settings(config_path)
    return _settings

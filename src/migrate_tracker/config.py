"""Configuration management for Migrate Tracker using Pydantic.

This module provides type-safe configuration models for the tracker, the
key-value store it records timestamps in, and logging.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerConfig(BaseModel):
    """Progress tracker configuration."""

    migration_name: str | None = Field(
        default=None, description="Default migration name used in messages and as store key"
    )
    feedback: int = Field(
        default=0,
        ge=0,
        description="Emit intermediate progress every N processed rows (0 disables)",
    )

    @field_validator("migration_name")
    @classmethod
    def validate_migration_name(cls, v: str | None) -> str | None:
        """Validate name is not blank when given."""
        if v is not None and v.strip() == "":
            raise ValueError("Migration name cannot be empty")
        return v


class StateConfig(BaseModel):
    """Key-value store configuration."""

    db_path: str = Field(
        default="./migration_state.db",
        description="SQLite file path or full database URL for the key-value store",
    )
    collection: str = Field(
        default="migrate_last_imported",
        description="Collection holding last-imported timestamps",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="WARNING",
        description="Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    file_level: str = Field(
        default="DEBUG",
        description="File log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    format: str = Field(default="json", description="Log file format (json or console)")
    file: str | None = Field(default=None, description="Log file path")

    @field_validator("level", "file_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v_lower


class TrackerSettings(BaseSettings):
    """Main configuration.

    Values come from (highest priority first) explicit arguments or YAML,
    then ``MIGRATE_TRACKER_*`` environment variables, e.g.
    ``MIGRATE_TRACKER_TRACKER__FEEDBACK=50``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MIGRATE_TRACKER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    tracker: TrackerConfig = Field(
        default_factory=TrackerConfig, description="Tracker configuration"
    )
    state: StateConfig = Field(default_factory=StateConfig, description="State configuration")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )


def load_config_from_yaml(config_path: str | Path) -> TrackerSettings:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        TrackerSettings: Loaded configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is empty or not a mapping
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        config_data = yaml.safe_load(f)

    if not config_data:
        raise ValueError(f"Empty configuration file: {config_path}")
    if not isinstance(config_data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {config_path}")

    config_data = _expand_env_vars(config_data)

    return TrackerSettings(**config_data)


def _expand_env_vars(data):
    """Recursively expand environment variables in config data.

    Supports ${VAR_NAME} syntax for environment variable substitution.

    Raises:
        ValueError: If a referenced environment variable is not set
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        if data.startswith("${") and data.endswith("}"):
            var_name = data[2:-1]
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(
                    f"Environment variable '{var_name}' not found. "
                    f"Please set it in your environment or .env file."
                )
            return env_value
        return data
    else:
        return data


def save_config_to_yaml(config: TrackerSettings, output_path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save
        output_path: Path to output YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)

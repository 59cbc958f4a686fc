"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..timezone import DEFAULT_TZ_NAME, TimezoneError, get_timezone

logger = logging.getLogger(__name__)

ENV_PREFIX = "ICALIMPORTER_"
ENV_NESTED_DELIMITER = "__"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    console_level: str = Field(
        default="INFO",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )
    file_path: Optional[str] = Field(default=None, description="Optional log file path")
    file_level: str = Field(default="DEBUG", description="File log level")
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )


class ImporterSettings(BaseSettings):
    """Importer settings with environment variable support."""

    app_name: str = Field(default="icalimporter", description="Application name")

    # Timezone used for floating (TZID-less) calendar times
    default_timezone: str = Field(
        default=DEFAULT_TZ_NAME, description="IANA zone for floating times"
    )

    # Network settings
    request_timeout: int = Field(default=30, description="HTTP request timeout in seconds")
    validate_ssl: bool = Field(default=True, description="Validate SSL certificates")

    # Events that ended more than this many hours ago are not imported
    staleness_window_hours: int = Field(
        default=24, description="Age of the stale-event cutoff in hours"
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter=ENV_NESTED_DELIMITER,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            get_timezone(value)
        except TimezoneError as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("request_timeout", "staleness_window_hours")
    @classmethod
    def _validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @property
    def tz(self) -> ZoneInfo:
        """Resolved default timezone."""
        return get_timezone(self.default_timezone)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a mapping from a YAML file."""
    loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    # safe_load returns None for empty files
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {path} must contain a mapping at top level")  # noqa: TRY004
    return loaded


def _env_keys() -> set[tuple[str, ...]]:
    """Return the setting paths currently set through environment variables."""
    keys = set()
    for name in os.environ:
        if name.upper().startswith(ENV_PREFIX):
            keys.add(tuple(name[len(ENV_PREFIX) :].lower().split(ENV_NESTED_DELIMITER)))
    return keys


def _without_env_keys(
    data: dict[str, Any], env_keys: set[tuple[str, ...]], prefix: tuple[str, ...] = ()
) -> dict[str, Any]:
    result = {}
    for key, value in data.items():
        path = (*prefix, str(key).lower())
        if path in env_keys:
            continue
        if isinstance(value, dict):
            value = _without_env_keys(value, env_keys, path)
        result[key] = value
    return result


def load_settings(path: Optional[Union[str, Path]] = None, **overrides: Any) -> ImporterSettings:
    """Load settings from YAML, environment and explicit overrides.

    Priority: explicit overrides > environment > YAML > defaults.

    Args:
        path: Optional YAML config file; a missing file means defaults
        **overrides: Explicit setting values

    Returns:
        Validated settings

    Raises:
        ValueError: If the file's top level is not a mapping
        pydantic.ValidationError: If a value is invalid
    """
    data: dict[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if config_path.exists():
            data = _without_env_keys(_load_yaml(config_path), _env_keys())
            logger.info("Loaded configuration from %s", config_path)
        else:
            logger.info("Config file %s not found; using defaults", config_path)

    data.update({key: value for key, value in overrides.items() if value is not None})
    settings = ImporterSettings(**data)
    logger.debug("Configuration values: %s", settings)
    return settings

"""Settings management using pydantic-settings with optional YAML defaults."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .exceptions import InvalidConfigurationError
from .logging_config import DEFAULT_LOG_LEVEL
from .notion_client import DEFAULT_API_VERSION, DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "notion-calendar" / "config.yaml"


class NotionCalendarSettings(BaseSettings):
    """Application settings with environment variable support.

    Every field can be set through a ``NOTION_``-prefixed environment
    variable, e.g. ``NOTION_API_TOKEN`` and ``NOTION_DB_ID``.
    """

    # Notion access
    api_token: SecretStr = Field(..., description="Notion integration token")
    db_id: str = Field(..., description="Identifier of the events database")
    api_base_url: str = Field(default=DEFAULT_BASE_URL, description="Notion API root URL")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="Notion-Version header")

    # HTTP behaviour
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP read timeout in seconds")
    max_retries: int = Field(default=3, ge=0, description="Maximum retry attempts")
    retry_backoff_factor: float = Field(default=1.5, gt=0, description="Exponential backoff base")
    page_size: int = Field(default=100, ge=1, le=100, description="Results per query page")

    # Database schema
    attendees_property: str = Field(default="Attendees", description="People property to filter on")
    time_property: str = Field(default="Event time", description="Date property with event time")

    # Output
    ical_prod_id: str = Field(default="prod_id", description="PRODID of generated calendars")
    skip_invalid_events: bool = Field(
        default=False, description="Skip pages without a valid event time instead of failing"
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Root log level")

    model_config = SettingsConfigDict(
        env_prefix="NOTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
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
        # Constructor values come from the config file and act as defaults
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load a mapping from a YAML file; an empty file yields an empty mapping."""
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise InvalidConfigurationError(f"Unable to read config file {path}: {e}") from e

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise InvalidConfigurationError(f"Config file {path} must contain a mapping at top level")
    return loaded


def load_settings(
    path: Optional[Union[str, Path]] = None, **overrides: Any
) -> NotionCalendarSettings:
    """Build settings from a YAML file, the environment and explicit overrides.

    Precedence, highest first: ``overrides``, environment (and ``.env``),
    config file, field defaults. A missing default config file is ignored;
    an explicitly given path must exist.

    Raises:
        InvalidConfigurationError: If the file is unreadable or values are
            missing or invalid
    """
    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise InvalidConfigurationError(f"Config file {config_path} not found")
    else:
        config_path = DEFAULT_CONFIG_PATH

    file_values: dict[str, Any] = {}
    if config_path.exists():
        file_values = _load_yaml(config_path)
        logger.info("Loaded configuration from %s", config_path)
    else:
        logger.debug("Config file %s not found; using environment only", config_path)

    applied = {key: value for key, value in overrides.items() if value is not None}

    try:
        settings = NotionCalendarSettings(**file_values)
        if applied:
            for key, value in applied.items():
                setattr(settings, key, value)
            logger.debug("Applied setting overrides: %s", sorted(applied))
    except ValidationError as e:
        missing = {str(err["loc"][0]) for err in e.errors() if err["type"] == "missing"}
        if "api_token" in missing:
            raise InvalidConfigurationError(
                "No Notion API token found in either the environment variable "
                "`NOTION_API_TOKEN` or the config file!"
            ) from e
        if "db_id" in missing:
            raise InvalidConfigurationError(
                "No Notion database id found in either the environment variable "
                "`NOTION_DB_ID` or the config file!"
            ) from e
        raise InvalidConfigurationError(f"Invalid configuration: {e}") from e

    return settings

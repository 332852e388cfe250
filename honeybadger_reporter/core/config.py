"""
Configuration for the Honeybadger reporter.

Settings are loaded once (usually at process start) and injected into
HoneybadgerService. The model is frozen so a loaded configuration cannot
drift between reports.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from honeybadger_reporter.__metadata__ import NOTICES_URL


logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT_NAME = "production"


class ConfigurationError(ValueError):
    """Raised when a required reporter setting is missing or empty."""


class HoneybadgerConfig(BaseModel):
    """Immutable reporter settings."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    environment_name: str = DEFAULT_ENVIRONMENT_NAME
    project_root: Path = Field(default_factory=Path.cwd)
    hostname: str | None = None
    endpoint: str = NOTICES_URL

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("api_key must not be empty")
        return value

    def resolved_project_root(self) -> str:
        """Absolute project root path as reported in server.project_root."""
        return str(self.project_root.expanduser().resolve())

    @classmethod
    def from_env(cls) -> HoneybadgerConfig:
        """
        Build a configuration from HONEYBADGER_* environment variables.

        Returns:
            Loaded configuration

        Raises:
            ConfigurationError: If HONEYBADGER_API_KEY is not set
        """
        api_key = os.getenv("HONEYBADGER_API_KEY")
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "No Honeybadger API key provided. Set the HONEYBADGER_API_KEY "
                "environment variable."
            )

        settings: dict[str, object] = {"api_key": api_key}

        environment_name = os.getenv("HONEYBADGER_ENVIRONMENT_NAME")
        if environment_name:
            settings["environment_name"] = environment_name

        project_root = os.getenv("HONEYBADGER_PROJECT_ROOT")
        if project_root:
            settings["project_root"] = Path(project_root)

        hostname = os.getenv("HONEYBADGER_HOSTNAME")
        if hostname:
            settings["hostname"] = hostname

        config = cls(**settings)
        logger.info(
            "Loaded Honeybadger configuration (environment=%s, project_root=%s)",
            config.environment_name,
            config.project_root,
        )
        return config

"""
Runtime settings — read from the process environment.

There is no config file: every knob is a ``DEVSETUP_*`` variable,
validated once at startup into a :class:`Settings` instance.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from devsetup.core.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DEVSETUP_"

DEFAULT_OS_RELEASE = Path("/etc/os-release")
DEFAULT_MARKER_COMMAND = "glinux-add-repo"
DEFAULT_POLL_INTERVAL = 5.0

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    """Process-wide settings."""

    log_level: LogLevel = "WARNING"
    log_file: str | None = None
    log_file_level: LogLevel | None = None
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, gt=0)
    os_release: Path = DEFAULT_OS_RELEASE
    marker_command: str = Field(default=DEFAULT_MARKER_COMMAND, min_length=1)

    @field_validator("log_level", "log_file_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``DEVSETUP_*`` environment variables.

    Raises:
        ConfigError: If a variable holds an invalid value.
    """
    env = os.environ if environ is None else environ

    raw: dict[str, str] = {}
    for field_name in Settings.model_fields:
        value = env.get(ENV_PREFIX + field_name.upper())
        if value:
            raw[field_name] = value

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid {ENV_PREFIX}* setting: {e}") from e

    logger.debug("Settings: %s", settings.model_dump())
    return settings

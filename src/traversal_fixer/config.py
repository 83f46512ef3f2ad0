"""Configuration loaded from environment variables."""

import logging
from collections.abc import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    """Runtime settings for the CLI, the services and the demo target."""

    log_level: str = Field(default="WARNING", description="Root logging level")
    probe_timeout: float = Field(
        default=10.0, gt=0, description="Seconds to wait for each language version probe"
    )
    fixed_suffix: str = Field(
        default="_fixed", min_length=1, description="Suffix for copy-mode output files"
    )
    demo_host: str = Field(default="127.0.0.1", description="Bind host for the demo target")
    demo_port: int = Field(default=8080, ge=1, le=65535, description="Bind port for the demo target")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


_ENV_KEYS = {
    "log_level": "TRAVERSAL_FIXER_LOG_LEVEL",
    "probe_timeout": "TRAVERSAL_FIXER_PROBE_TIMEOUT",
    "fixed_suffix": "TRAVERSAL_FIXER_FIXED_SUFFIX",
    "demo_host": "DEMO_HOST",
    "demo_port": "DEMO_PORT",
}


def load_settings(environ: Mapping[str, str], **defaults) -> Settings:
    """Build Settings from an environment mapping.

    Args:
        environ: Variables to read (usually ``os.environ``).
        **defaults: Field overrides applied when the variable is unset,
            e.g. ``log_level="INFO"`` for the services.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    values = dict(defaults)
    for field, key in _ENV_KEYS.items():
        if environ.get(key):
            values[field] = environ[key]
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

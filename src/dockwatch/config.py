"""Environment-driven configuration."""

import logging
from collections.abc import Mapping

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dockwatch.core.errors import ConfigurationError
from dockwatch.core.models import Dimension

DEFAULT_INTERVAL = 10


class Settings(BaseSettings):
    """Runtime settings read from environment variables.

    Variable names are the upper-cased field names (``NAMESPACE``,
    ``INTERVAL``, ...). Empty variables count as unset.

    Attributes:
        namespace: CloudWatch namespace for every data point. Required.
        region: AWS region, None for the boto3 default chain.
        stack_name: Value of the Stack dimension.
        interval: Seconds between cycles.
        disabled: Dry-run mode, nothing is sent to CloudWatch.
        log_level: Root log level name.
        docker: Docker CLI executable.
    """

    model_config = SettingsConfigDict(
        frozen=True, env_ignore_empty=True, extra="ignore"
    )

    namespace: str = Field(min_length=1)
    region: str | None = None
    stack_name: str = ""
    interval: int = Field(DEFAULT_INTERVAL, gt=0)
    disabled: bool = False
    log_level: str = "INFO"
    docker: str = "docker"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"not a known level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Load settings, mapping validation failures to ConfigurationError.

        Args:
            environ: Variables that take precedence over the process
                environment. None reads the process environment only.

        Raises:
            ConfigurationError: If NAMESPACE is missing or a value is invalid.
        """
        overrides = {}
        if environ is not None:
            for name in cls.model_fields:
                raw = environ.get(name.upper())
                if raw:
                    overrides[name] = raw
        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ConfigurationError(_describe(e)) from None

    @property
    def base_dimensions(self) -> tuple[Dimension, ...]:
        """Dimensions shared by every observation."""
        return (Dimension("Stack", self.stack_name),)


def _describe(error: ValidationError) -> str:
    """Render validation errors with environment variable names."""
    return "; ".join(
        f"{'.'.join(str(part) for part in detail['loc']).upper()}: {detail['msg']}"
        for detail in error.errors()
    )

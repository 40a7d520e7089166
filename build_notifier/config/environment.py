"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "key-value"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
        subject_prefix: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment or "local"
        self.subject_prefix = subject_prefix


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_FORMAT: Override log format (json, key-value)
    - ENVIRONMENT: Environment label attached to every log record
    - NOTIFIER_SUBJECT_PREFIX: Override the configured subject prefix

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    log_format = os.getenv("LOG_FORMAT")
    environment = os.getenv("ENVIRONMENT")
    subject_prefix = os.getenv("NOTIFIER_SUBJECT_PREFIX")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if log_format:
        if log_format.lower() not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(VALID_LOG_FORMATS)}"
            )
        else:
            log_format = log_format.lower()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you do not need to override",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        log_format=log_format,
        environment=environment,
        subject_prefix=subject_prefix.strip() if subject_prefix else None,
    )

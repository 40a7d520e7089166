"""Rule configuration management for the build notifier."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError, UnknownBuildStatusError
from .loader import load_config, parse_config, validate_config_file
from .models import (
    DEFAULT_SUBJECTS,
    ConverterConfig,
    ConverterType,
    GroupConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    PublisherConfig,
    SubjectCategory,
    TriggerCategory,
    UserConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "parse_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "PublisherConfig",
    "UserConfig",
    "GroupConfig",
    "ConverterConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    "DEFAULT_SUBJECTS",
    # Enums
    "TriggerCategory",
    "SubjectCategory",
    "ConverterType",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
    "UnknownBuildStatusError",
]

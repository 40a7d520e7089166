"""Rule configuration loader for the build notifier."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import PublisherConfig
from .validators import check_for_warnings, emit_warnings


def load_config(config_path: Optional[Path] = None) -> PublisherConfig:
    """
    Load and validate the rule configuration from a YAML file.

    Implements fallback logic for config file location:
    1. Use provided config_path if given
    2. Try notifier.yaml in current directory
    3. Try ./config/notifier.yaml
    4. Fail with helpful error message

    Subject templates missing from the file are filled with the built-in
    defaults here, once, so the returned configuration is always complete.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Validated PublisherConfig

    Raises:
        ConfigurationError: If configuration is invalid or file not found
    """
    config_file = _find_config_file(config_path)

    try:
        with open(config_file, "r") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=[
                "Copy notifier.example.yaml to notifier.yaml",
                f"Ensure {config_file} exists and is readable",
            ],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        )

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=[
                "Copy notifier.example.yaml to notifier.yaml",
                "Add users, groups and subject settings to your config file",
            ],
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["Review notifier.example.yaml for the expected layout"],
        )

    return parse_config(config_dict)


def parse_config(config_dict: Dict[str, Any]) -> PublisherConfig:
    """
    Validate an already-parsed configuration mapping.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        Validated PublisherConfig

    Raises:
        ConfigurationError: If validation fails
    """
    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        return PublisherConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=format_validation_errors(e),
            suggestions=[
                "Review notifier.example.yaml for correct format",
                "Trigger categories: always, change, failed, success, fixed, exception",
                "Subject categories: broken, exception, fixed, still_broken, success",
            ],
        )


def format_validation_errors(error: ValidationError) -> List[str]:
    """
    Convert Pydantic validation errors to user-friendly messages.

    Args:
        error: ValidationError raised by model validation

    Returns:
        One message per validation error
    """
    errors = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"])
        error_msg = item["msg"]
        error_type = item["type"]

        if error_type == "missing":
            errors.append(f"Missing required field: {field_path}")
        elif error_type in ["string_type", "int_type", "bool_type", "list_type", "dict_type"]:
            expected_type = error_type.replace("_type", "")
            errors.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {item.get('input')}"
            )
        elif "enum" in error_type:
            errors.append(f"Invalid value for '{field_path}': {error_msg}")
        elif field_path:
            errors.append(f"{field_path}: {error_msg}")
        else:
            errors.append(error_msg)
    return errors


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    """
    Find configuration file using fallback logic.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Path to configuration file

    Raises:
        ConfigurationError: If no config file is found
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    candidates = [
        Path("notifier.yaml"),
        Path("config") / "notifier.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[
            "Tried: notifier.yaml",
            "Tried: config/notifier.yaml",
        ],
        suggestions=[
            "Copy notifier.example.yaml to notifier.yaml",
            "Use --config flag to specify a custom location",
        ],
    )


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file.

    Useful for testing or pre-deployment validation.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        load_config(config_path)
        print(f"✓ Configuration file {config_path} is valid")
        return True
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False

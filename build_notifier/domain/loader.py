"""Loading build-result snapshots from YAML or JSON files."""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from build_notifier.config.loader import format_validation_errors

from .models import BuildResult


class BuildResultError(Exception):
    """Raised when a build-result snapshot cannot be read or validated."""

    def __init__(self, message: str, errors=None):
        self.message = message
        self.errors = errors or []
        details = "".join(f"\n  - {error}" for error in self.errors)
        super().__init__(f"{message}{details}")


def parse_build_result(data: Dict[str, Any]) -> BuildResult:
    """Validate a build-result mapping.

    Args:
        data: Raw build-result dictionary

    Returns:
        Validated BuildResult

    Raises:
        BuildResultError: If a field is missing or holds an unknown status
    """
    try:
        return BuildResult.model_validate(data)
    except ValidationError as e:
        raise BuildResultError(
            "Build result validation failed", errors=format_validation_errors(e)
        ) from e


def load_build_result(path: Path) -> BuildResult:
    """Load a build result from a YAML (or JSON) file.

    Args:
        path: Path to the snapshot file

    Returns:
        Validated BuildResult

    Raises:
        BuildResultError: If the file is missing, unparsable or invalid
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise BuildResultError(f"Build result file not found: {path}") from e
    except yaml.YAMLError as e:
        raise BuildResultError(f"Failed to parse build result: {e}") from e

    if not isinstance(data, dict):
        raise BuildResultError(f"Build result file must contain a mapping: {path}")

    return parse_build_result(data)

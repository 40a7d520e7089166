"""Domain models for the build notifier."""

from .loader import BuildResultError, load_build_result, parse_build_result
from .models import BuildResult, Contributor, IntegrationStatus

__all__ = [
    "BuildResult",
    "Contributor",
    "IntegrationStatus",
    "BuildResultError",
    "load_build_result",
    "parse_build_result",
]

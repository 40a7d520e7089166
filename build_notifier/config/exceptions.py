"""Exceptions raised for defective rule configuration or build input."""

from typing import List, Optional, Sequence


class ConfigurationError(Exception):
    """Raised when the rule configuration cannot be used.

    Carries the individual validation problems and optional hints, both
    rendered into the exception text as numbered and bulleted lists.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Sequence[str]] = None,
        suggestions: Optional[Sequence[str]] = None,
    ):
        self.message = message
        self.errors: List[str] = list(errors or [])
        self.suggestions: List[str] = list(suggestions or [])
        super().__init__(self._render())

    def _render(self) -> str:
        lines = [self.message]
        if self.errors:
            lines.append("\nValidation Errors:")
            lines.extend(f"  {number}. {error}" for number, error in enumerate(self.errors, 1))
        if self.suggestions:
            lines.append("\nSuggestions:")
            lines.extend(f"  - {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)


class UnknownBuildStatusError(ConfigurationError):
    """Raised when a build status outside Success/Failure/Exception reaches the composer.

    Kept as its own type so callers can tell a bad build-result status
    apart from a bad rule configuration.
    """

    def __init__(self, status: object):
        self.status = status
        super().__init__(
            f"Unknown build status: {getattr(status, 'value', status)}",
            suggestions=["Build status must be one of: Success, Failure, Exception"],
        )

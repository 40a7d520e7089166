"""Subject line composition for build notifications."""

import logging
import re
from typing import Any, Iterable, Mapping, Optional, Tuple

from build_notifier.config.models import PublisherConfig, SubjectCategory
from build_notifier.domain.models import BuildResult
from build_notifier.logging import get_logger
from build_notifier.utils.formatting import property_to_string

from .outcome import classify_outcome

logger = get_logger(__name__, component="routing")

PLACEHOLDER_TEMPLATE = r"\$\{(%s)\}"


def placeholder_pattern(keys: Iterable[str]) -> Optional[re.Pattern]:
    """Compile a pattern matching ``${key}`` for exactly the given keys.

    Keys are escaped, so names containing braces or regex metacharacters
    match literally. Longer keys are tried first.
    """
    names = sorted({str(key) for key in keys}, key=lambda name: (-len(name), name))
    if not names:
        return None
    return re.compile(PLACEHOLDER_TEMPLATE % "|".join(re.escape(name) for name in names))


def render_template(template: str, properties: Mapping[str, Any]) -> str:
    """Substitute ``${key}`` placeholders with property values.

    Substitution is a single pass over the template: text inserted for one
    placeholder is never scanned again, so the order of the properties
    cannot change the result. Placeholders without a matching property are
    left as they are.

    Args:
        template: Template text
        properties: Build properties keyed by placeholder name

    Returns:
        Rendered text

    Example:
        >>> render_template("${CCNetProject} is still broken", {"CCNetProject": "Foo"})
        'Foo is still broken'
    """
    values = {str(key): value for key, value in properties.items()}
    pattern = placeholder_pattern(values)
    if pattern is None:
        return template

    return pattern.sub(lambda match: property_to_string(values[match.group(1)]), template)


class SubjectComposer:
    """Selects and renders the subject template for a build result."""

    def __init__(
        self,
        config: PublisherConfig,
        subject_prefix: Optional[str] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize SubjectComposer.

        Args:
            config: Validated rule configuration (subject map already complete)
            subject_prefix: Overrides config.subject_prefix when given
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config
        self.subject_prefix = subject_prefix if subject_prefix is not None else config.subject_prefix
        self.logger = logger_instance or logger

    def select_template(self, result: BuildResult) -> Tuple[SubjectCategory, str]:
        """Classify the result and return its category with the matching template.

        Raises:
            UnknownBuildStatusError: If the status is not Success, Failure or Exception
        """
        category = classify_outcome(result)
        return category, self.config.get_subject_template(category)

    def compose(self, result: BuildResult) -> str:
        """Render the subject line for a build result.

        Args:
            result: Build result to describe

        Returns:
            Subject line, prefixed with "<prefix> " when a prefix is configured

        Raises:
            UnknownBuildStatusError: If the status is not Success, Failure or Exception
        """
        category, template = self.select_template(result)
        subject = render_template(template, result.properties)

        if self.subject_prefix:
            subject = f"{self.subject_prefix} {subject}"

        self.logger.debug(
            "Subject composed",
            extra={
                "event": "subject.composed",
                "status": result.status,
                "subject_category": category,
                "subject": subject,
            },
        )
        return subject

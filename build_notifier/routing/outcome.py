"""Outcome classification shared by the recipient resolver and subject composer.

Both consumers work from the same predicate: a build's state changed when
its status differs from the preceding run's status. A first-ever run
reports UNKNOWN as its previous status, which differs from every concrete
status, so the first run always counts as a state change.
"""

from typing import Any, Callable, Dict

from build_notifier.config.exceptions import ConfigurationError, UnknownBuildStatusError
from build_notifier.config.models import SubjectCategory, TriggerCategory
from build_notifier.domain.models import BuildResult, IntegrationStatus


def state_changed(result: BuildResult) -> bool:
    """Return True when the build status differs from the preceding run's status."""
    return result.status != result.previous_status


def is_failed(result: BuildResult) -> bool:
    """Return True when the build failed or raised an exception."""
    return result.status in (IntegrationStatus.FAILURE, IntegrationStatus.EXCEPTION)


TRIGGER_GUARDS: Dict[TriggerCategory, Callable[[BuildResult], bool]] = {
    TriggerCategory.ALWAYS: lambda result: True,
    TriggerCategory.CHANGE: state_changed,
    TriggerCategory.FAILED: is_failed,
    TriggerCategory.SUCCESS: lambda result: result.status == IntegrationStatus.SUCCESS,
    TriggerCategory.FIXED: lambda result: bool(result.fixed),
    TriggerCategory.EXCEPTION: lambda result: result.status == IntegrationStatus.EXCEPTION,
}


def coerce_trigger_category(category: Any) -> TriggerCategory:
    """Resolve a trigger category, failing fast on values outside the enumeration.

    Raises:
        ConfigurationError: If the value is not a known trigger category
    """
    try:
        return TriggerCategory(category)
    except ValueError:
        raise ConfigurationError(
            f"Unknown notification type: {category}",
            suggestions=[
                "Use one of: " + ", ".join(member.value for member in TriggerCategory)
            ],
        ) from None


def trigger_applies(category: Any, result: BuildResult) -> bool:
    """Evaluate the guard for a trigger category against a build result.

    Args:
        category: TriggerCategory member or its string value
        result: Build result to evaluate

    Returns:
        True if recipients tied to this category should be notified

    Raises:
        ConfigurationError: If the category is unknown
    """
    return TRIGGER_GUARDS[coerce_trigger_category(category)](result)


def classify_outcome(result: BuildResult) -> SubjectCategory:
    """Map a build result to the subject category it is reported under.

    Precedence: exception, then fixed/success, then broken/still broken.

    Raises:
        UnknownBuildStatusError: If the status is not Success, Failure or Exception
    """
    status = result.status
    if status == IntegrationStatus.EXCEPTION:
        return SubjectCategory.EXCEPTION
    if status == IntegrationStatus.SUCCESS:
        return SubjectCategory.FIXED if state_changed(result) else SubjectCategory.SUCCESS
    if status == IntegrationStatus.FAILURE:
        return SubjectCategory.BROKEN if state_changed(result) else SubjectCategory.STILL_BROKEN
    raise UnknownBuildStatusError(status)

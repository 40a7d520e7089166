"""Notification routing for build results.

This module provides:
- RecipientResolver: who is notified about a build result
- SubjectComposer: which subject line the notification carries
- Outcome helpers shared by both (state change, trigger guards, classification)
"""

from .models import Recipient
from .outcome import (
    TRIGGER_GUARDS,
    classify_outcome,
    coerce_trigger_category,
    is_failed,
    state_changed,
    trigger_applies,
)
from .recipients import RecipientResolver
from .subject import SubjectComposer, render_template

__all__ = [
    "RecipientResolver",
    "SubjectComposer",
    "Recipient",
    "TRIGGER_GUARDS",
    "classify_outcome",
    "coerce_trigger_category",
    "is_failed",
    "state_changed",
    "trigger_applies",
    "render_template",
]

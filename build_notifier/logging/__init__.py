"""Structured logging for the build notifier.

Loggers obtained through get_logger() tag every record with a component
name; configure_logging() installs a key-value or JSON formatter on the
root logger; log_context() scopes extra fields such as the project name
onto every record emitted inside it.
"""

import logging
from typing import Optional, Union


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its component field with per-call extra fields."""

    def process(self, msg, kwargs):
        # Fields passed at the call site win over the adapter's defaults
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Get a logger with an optional default component field.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier to inject into all logs

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="routing")
        >>> logger.debug("Recipients resolved", extra={"event": "recipients.resolved"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


from .config import configure_logging  # noqa: E402
from .context import clear_log_context, get_log_context, log_context  # noqa: E402

__all__ = [
    "ComponentLoggerAdapter",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_log_context",
    "clear_log_context",
]

"""Notification message metadata.

Delivery itself lives outside this package; NotificationMessage only
answers who receives a build notification and which subject it carries.
"""

from .message import NotificationMessage, build_message

__all__ = [
    "NotificationMessage",
    "build_message",
]

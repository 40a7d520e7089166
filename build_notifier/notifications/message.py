"""Message metadata for one build notification.

NotificationMessage bundles the recipient resolver and the subject composer
over the same build result and rule configuration, giving delivery code
the two values it needs: who receives the message and what its subject is.
"""

from typing import Any, Dict, List, Optional, Sequence

from build_notifier.config.models import PublisherConfig
from build_notifier.converters import AddressConverter
from build_notifier.domain.models import BuildResult
from build_notifier.routing import Recipient, RecipientResolver, SubjectComposer


class NotificationMessage:
    """Recipients and subject for the notification about one build result.

    Both values are computed on access and never cached; reading them twice
    yields identical output.
    """

    def __init__(
        self,
        result: BuildResult,
        config: PublisherConfig,
        converters: Optional[Sequence[AddressConverter]] = None,
        subject_prefix: Optional[str] = None,
    ):
        """Initialize NotificationMessage.

        Args:
            result: Build result the message reports on
            config: Validated rule configuration
            converters: Optional converter chain (built from config when omitted)
            subject_prefix: Optional override for config.subject_prefix
        """
        self.result = result
        self.config = config
        self.resolver = RecipientResolver(config, converters=converters)
        self.composer = SubjectComposer(config, subject_prefix=subject_prefix)

    @property
    def recipient_records(self) -> List[Recipient]:
        """Resolved recipients, ordered by address."""
        return self.resolver.resolve(self.result)

    @property
    def recipient_addresses(self) -> List[str]:
        """Resolved addresses, ordered."""
        return [recipient.address for recipient in self.recipient_records]

    @property
    def recipients(self) -> str:
        """Resolved addresses joined with ", " (empty string when nobody qualifies)."""
        return ", ".join(self.recipient_addresses)

    @property
    def subject(self) -> str:
        """Rendered subject line."""
        return self.composer.compose(self.result)

    def to_dict(self) -> Dict[str, Any]:
        """Summarize the message for logs or JSON output."""
        records = self.recipient_records
        return {
            "subject": self.subject,
            "recipients": [recipient.address for recipient in records],
            "recipient_details": [
                {
                    "address": recipient.address,
                    "username": recipient.username,
                    "group": recipient.group,
                    "reason": recipient.reason,
                }
                for recipient in records
            ],
        }


def build_message(
    result: BuildResult,
    config: PublisherConfig,
    subject_prefix: Optional[str] = None,
) -> NotificationMessage:
    """Create the notification message for a build result.

    Example:
        >>> message = build_message(result, config)
        >>> message.recipients, message.subject
    """
    return NotificationMessage(result, config, subject_prefix=subject_prefix)

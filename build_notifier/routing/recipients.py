"""Recipient resolution for build notifications.

This module implements the routing logic that:
1. Adds directory users whose group trigger holds for the build result
2. Adds contributors and failure contributors for every modifier
   notification category whose guard holds
3. Deduplicates by address and orders the result by address
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from build_notifier.config.models import PublisherConfig
from build_notifier.converters import AddressConverter, apply_converters, build_converters
from build_notifier.domain.models import BuildResult
from build_notifier.logging import get_logger

from .models import Recipient
from .outcome import coerce_trigger_category, trigger_applies

logger = get_logger(__name__, component="routing")


class RecipientResolver:
    """Computes the deduplicated, address-ordered recipients of one build result.

    Responsibilities:
    - Evaluate each user's group trigger (direct subscriptions)
    - Evaluate modifier notification categories (contributor routing)
    - Resolve usernames to addresses through the directory or converter chain
    - Silently drop identities that resolve to no address

    The resolver keeps no state between calls; the same inputs always
    produce the same output.
    """

    def __init__(
        self,
        config: PublisherConfig,
        converters: Optional[Sequence[AddressConverter]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize RecipientResolver.

        Args:
            config: Validated rule configuration
            converters: Converter chain (built from config.converters when omitted)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.config = config
        if converters is None:
            converters = build_converters(config.converters)
        self.converters: List[AddressConverter] = list(converters)
        self.logger = logger_instance or logger

    def resolve(self, result: BuildResult) -> List[Recipient]:
        """Resolve the recipients for a build result.

        Args:
            result: Build result to route

        Returns:
            Recipients sorted by address, one per address

        Raises:
            ConfigurationError: If a modifier notification category is unknown
        """
        # Validate the whole modifier list up front so a bad entry fails
        # regardless of which guards hold for this result
        modifier_categories = [
            coerce_trigger_category(category)
            for category in self.config.modifier_notification_types
        ]

        recipients: Dict[str, Recipient] = {}

        self._add_subscribers(recipients, result)

        for category in modifier_categories:
            if trigger_applies(category, result):
                reason = f"modifier:{category.value}"
                self._add_identities(recipients, result.contributor_names, reason)
                self._add_identities(recipients, result.failure_contributors, reason)

        ordered = [recipients[address] for address in sorted(recipients)]

        self.logger.debug(
            "Recipients resolved",
            extra={
                "event": "recipients.resolved",
                "status": result.status,
                "recipient_count": len(ordered),
                "contributor_count": len(result.contributors),
                "failure_contributor_count": len(result.failure_contributors),
            },
        )
        return ordered

    def resolve_addresses(self, result: BuildResult) -> List[str]:
        """Resolve recipients and return only their addresses, sorted."""
        return [recipient.address for recipient in self.resolve(result)]

    def format_recipients(self, result: BuildResult) -> str:
        """Resolve recipients as a comma-space separated address string."""
        return ", ".join(self.resolve_addresses(result))

    def resolve_address(self, username: str) -> Optional[str]:
        """Resolve a username to an address.

        The directory entry's address wins; otherwise the converter chain is
        applied to the username. Without converters an unknown username
        yields None.

        Args:
            username: Directory or source-control username

        Returns:
            Address, or None if the identity cannot be resolved
        """
        user = self.config.get_user(username)
        if user is not None and user.address:
            return user.address
        return apply_converters(username, self.converters)

    def _add_subscribers(self, recipients: Dict[str, Recipient], result: BuildResult) -> None:
        """Add directory users whose group trigger holds for the result."""
        for user in self.config.users:
            group = self.config.get_group(user.group)
            if group is None:
                self.logger.debug(
                    "Skipping user without resolvable group",
                    extra={"username": user.name, "group": user.group},
                )
                continue

            category = coerce_trigger_category(group.notification)
            if not trigger_applies(category, result):
                continue

            address = self.resolve_address(user.name)
            if address is None:
                self.logger.debug(
                    "Skipping subscriber without address",
                    extra={"username": user.name, "group": group.name},
                )
                continue

            recipients[address] = Recipient(
                address=address,
                username=user.name,
                group=group.name,
                reason=f"group:{category.value}",
            )

    def _add_identities(
        self, recipients: Dict[str, Recipient], usernames: Iterable[str], reason: str
    ) -> None:
        """Add contributors (or failure contributors) that resolve to an address."""
        for username in usernames:
            address = self.resolve_address(username)
            if address is None:
                self.logger.debug(
                    "Dropping unresolvable identity",
                    extra={"username": username, "reason": reason},
                )
                continue

            user = self.config.get_user(username)
            recipients[address] = Recipient(
                address=address,
                username=username,
                group=user.group if user is not None else None,
                reason=reason,
            )

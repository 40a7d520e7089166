"""Base converter class and chaining for username-to-address conversion.

Converters turn a source-control identity into a deliverable e-mail
address when the user directory has no explicit entry for it. They are
applied left to right; each one receives the previous one's output.
"""

import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from build_notifier.config.exceptions import ConfigurationError
from build_notifier.logging import get_logger
from build_notifier.utils.addresses import normalize_address

logger = get_logger(__name__, component="converters")


class AddressConverter(ABC):
    """Base class for all address converters.

    Implementations must be pure: the same input always yields the same
    output and no state is kept between calls.
    """

    @abstractmethod
    def convert(self, username: str) -> Optional[str]:
        """Convert an identity string.

        Args:
            username: Username or partially converted address

        Returns:
            Converted string, or None when no address can be produced
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class DomainConverter(AddressConverter):
    """Appends ``@domain`` to identities that do not carry a domain yet."""

    def __init__(self, domain: str) -> None:
        domain = (domain or "").strip().lstrip("@")
        if not domain:
            raise ConfigurationError("Domain converter requires a non-empty domain")
        self.domain = domain

    def convert(self, username: str) -> Optional[str]:
        if "@" in username:
            return username
        return f"{username}@{self.domain}"

    def __repr__(self) -> str:
        return f"DomainConverter(domain={self.domain!r})"


class RegexConverter(AddressConverter):
    """Rewrites identities with a regular expression substitution."""

    def __init__(self, find: str, replace: str = "") -> None:
        try:
            self.pattern = re.compile(find)
        except re.error as e:
            raise ConfigurationError(f"Invalid regex pattern '{find}': {e}") from e
        self.replace = replace

    def convert(self, username: str) -> Optional[str]:
        return self.pattern.sub(self.replace, username)

    def __repr__(self) -> str:
        return f"RegexConverter(find={self.pattern.pattern!r}, replace={self.replace!r})"


class LowerCaseConverter(AddressConverter):
    """Lower-cases identities."""

    def convert(self, username: str) -> Optional[str]:
        return username.lower()


def apply_converters(username: str, converters: Sequence[AddressConverter]) -> Optional[str]:
    """Run a username through the converter chain.

    The chain stops as soon as a converter yields None or an empty string.
    The final value must be a syntactically valid e-mail address (intranet
    domains such as ``corp.local`` or ``mailhost`` included); anything else
    counts as unresolvable.

    Args:
        username: Source-control identity
        converters: Ordered converter chain

    Returns:
        Normalized e-mail address, or None if the chain produced no usable address
    """
    if not converters:
        return None

    address: Optional[str] = username
    for converter in converters:
        address = converter.convert(address)
        if not address or not address.strip():
            logger.debug(
                "Converter chain yielded no address",
                extra={"username": username, "converter": repr(converter)},
            )
            return None
        address = address.strip()

    try:
        return normalize_address(address)
    except ValueError as e:
        logger.debug(
            "Converted address is not a valid e-mail address",
            extra={"username": username, "address": address, "reason": str(e)},
        )
        return None

"""Result types produced by the routing components."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Recipient:
    """One resolved notification recipient.

    Attributes:
        address: Deliverable e-mail address (unique key within a recipient set)
        username: Directory or source-control username the address belongs to
        group: Group of the directory entry, if any
        reason: Why the recipient was added, e.g. "group:always" or "modifier:failed"
    """

    address: str
    username: str
    group: Optional[str] = None
    reason: str = ""

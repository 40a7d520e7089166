"""Enum helpers shared by configuration and domain models."""

import re
from enum import Enum
from typing import Any


def normalize_enum_key(value: str) -> str:
    """Reduce an enum spelling to a comparable key.

    Example:
        >>> normalize_enum_key("StillBroken") == normalize_enum_key("still_broken")
        True
    """
    return re.sub(r"[\s_\-]", "", value).lower()


class CaseInsensitiveEnum(str, Enum):
    """String enum that accepts any casing and separator style on lookup."""

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            key = normalize_enum_key(value)
            for member in cls:
                if normalize_enum_key(member.value) == key:
                    return member
        return None

    @classmethod
    def parse(cls, value: Any):
        """Look up a member, raising ValueError with the allowed values listed."""
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown {cls.__name__} '{value}'. Allowed: {allowed}") from None

"""Utility functions for enum parsing, address normalization and property formatting."""

from .addresses import is_special_use_domain, normalize_address
from .enums import CaseInsensitiveEnum, normalize_enum_key
from .formatting import property_to_string

__all__ = [
    "CaseInsensitiveEnum",
    "is_special_use_domain",
    "normalize_address",
    "normalize_enum_key",
    "property_to_string",
]

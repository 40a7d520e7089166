"""Username-to-address converters.

This module provides:
- AddressConverter: base class for converters
- DomainConverter, RegexConverter, LowerCaseConverter: built-in converters
- apply_converters: left-to-right chaining with short-circuit on empty output
- build_converters: factory turning configuration entries into a chain
"""

from .base import (
    AddressConverter,
    DomainConverter,
    LowerCaseConverter,
    RegexConverter,
    apply_converters,
)
from .factory import build_converters, get_converter

__all__ = [
    "AddressConverter",
    "DomainConverter",
    "RegexConverter",
    "LowerCaseConverter",
    "apply_converters",
    "build_converters",
    "get_converter",
]

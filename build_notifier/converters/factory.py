"""Factory function for instantiating the configured converter chain."""

import logging
from typing import List, Sequence

from build_notifier.config.exceptions import ConfigurationError
from build_notifier.config.models import ConverterConfig

from .base import AddressConverter, DomainConverter, LowerCaseConverter, RegexConverter

logger = logging.getLogger(__name__)


def get_converter(converter_config: ConverterConfig) -> AddressConverter:
    """Instantiate the converter described by one configuration entry.

    Args:
        converter_config: Converter configuration with type and parameters

    Returns:
        Instantiated converter

    Raises:
        ConfigurationError: If the converter type is not supported

    Example:
        >>> converter = get_converter(ConverterConfig(type="domain", domain="example.com"))
        >>> converter.convert("alice")
        'alice@example.com'
    """
    converter_type = (
        converter_config.type.value
        if hasattr(converter_config.type, "value")
        else str(converter_config.type).lower()
    )

    if converter_type == "domain":
        converter: AddressConverter = DomainConverter(converter_config.domain)
    elif converter_type == "regex":
        converter = RegexConverter(converter_config.find, converter_config.replace)
    elif converter_type == "lowercase":
        converter = LowerCaseConverter()
    else:
        raise ConfigurationError(
            f"Unknown converter type: {converter_config.type}. "
            "Supported types: domain, lowercase, regex"
        )

    logger.debug(
        "Created converter instance",
        extra={"converter_type": converter_type, "converter": repr(converter)},
    )
    return converter


def build_converters(converter_configs: Sequence[ConverterConfig]) -> List[AddressConverter]:
    """Instantiate the converter chain, preserving configured order.

    Args:
        converter_configs: Ordered converter configuration entries

    Returns:
        Ordered list of converters
    """
    return [get_converter(converter_config) for converter_config in converter_configs]

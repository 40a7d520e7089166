"""Unit tests for username-to-address converters."""

import pytest

from build_notifier.config.exceptions import ConfigurationError
from build_notifier.config.models import ConverterConfig
from build_notifier.converters import (
    AddressConverter,
    DomainConverter,
    LowerCaseConverter,
    RegexConverter,
    apply_converters,
    build_converters,
    get_converter,
)


class NullConverter(AddressConverter):
    """Converter that never produces an address."""

    def __init__(self):
        self.calls = 0

    def convert(self, username):
        self.calls += 1
        return None


class TestConverters:
    """Tests for the built-in converters."""

    def test_domain_converter_appends_domain(self):
        """Test that the domain is appended to bare usernames."""
        assert DomainConverter("example.com").convert("alice") == "alice@example.com"

    def test_domain_converter_keeps_existing_domain(self):
        """Test that identities with a domain pass through."""
        assert DomainConverter("example.com").convert("alice@corp.org") == "alice@corp.org"

    def test_domain_converter_strips_leading_at(self):
        """Test that '@example.com' is accepted as a domain."""
        assert DomainConverter("@example.com").convert("bob") == "bob@example.com"

    def test_domain_converter_requires_domain(self):
        """Test that an empty domain is a configuration error."""
        with pytest.raises(ConfigurationError):
            DomainConverter("  ")

    def test_regex_converter(self):
        """Test regex substitution with a group reference."""
        converter = RegexConverter(find=r"^DOMAIN\\(.*)$", replace=r"\1@example.com")

        assert converter.convert("DOMAIN\\alice") == "alice@example.com"

    def test_regex_converter_invalid_pattern(self):
        """Test that an invalid pattern is a configuration error."""
        with pytest.raises(ConfigurationError):
            RegexConverter(find="(")

    def test_lowercase_converter(self):
        """Test lower-casing."""
        assert LowerCaseConverter().convert("Alice@Example.COM") == "alice@example.com"


class TestApplyConverters:
    """Tests for converter chaining."""

    def test_chain_applies_left_to_right(self):
        """Test that each converter receives the previous output."""
        chain = [LowerCaseConverter(), DomainConverter("example.com")]

        assert apply_converters("Alice", chain) == "alice@example.com"

    def test_order_matters(self):
        """Test that reversing the chain changes the result."""
        chain = [DomainConverter("Example.com"), RegexConverter(find="^a", replace="A")]

        assert apply_converters("alice", chain) == "Alice@example.com"

    def test_no_converters_yields_none(self):
        """Test that an empty chain resolves nothing."""
        assert apply_converters("alice", []) is None

    def test_short_circuits_on_empty_result(self):
        """Test that the chain stops once a converter yields nothing."""
        trailing = NullConverter()
        chain = [RegexConverter(find=".*", replace=""), trailing]

        assert apply_converters("alice", chain) is None
        assert trailing.calls == 0

    def test_short_circuits_on_none(self):
        """Test that a None result ends the chain."""
        assert apply_converters("alice", [NullConverter(), DomainConverter("example.com")]) is None

    def test_invalid_final_address_yields_none(self):
        """Test that output which is not an e-mail address is discarded."""
        assert apply_converters("alice", [LowerCaseConverter()]) is None


class TestFactory:
    """Tests for building converters from configuration."""

    def test_build_converters_preserves_order(self):
        """Test that the chain follows the configured order."""
        configs = [
            ConverterConfig(type="regex", find="^x", replace=""),
            ConverterConfig(type="lowercase"),
            ConverterConfig(type="domain", domain="example.com"),
        ]

        chain = build_converters(configs)

        assert [type(converter) for converter in chain] == [
            RegexConverter,
            LowerCaseConverter,
            DomainConverter,
        ]
        assert apply_converters("xAlice", chain) == "alice@example.com"

    def test_get_converter_case_insensitive_type(self):
        """Test that converter types are matched regardless of case."""
        converter = get_converter(ConverterConfig(type="Domain", domain="example.com"))

        assert isinstance(converter, DomainConverter)

    def test_get_converter_unknown_type(self):
        """Test that unsupported types raise a configuration error."""
        config = ConverterConfig.model_construct(type="ldap")

        with pytest.raises(ConfigurationError) as exc_info:
            get_converter(config)

        assert "Unknown converter type" in str(exc_info.value)

    def test_build_converters_empty(self):
        """Test that no configuration yields an empty chain."""
        assert build_converters([]) == []

"""Tests for property formatting, address normalization and enum helpers."""

from datetime import date, datetime

import pytest

from build_notifier.domain.models import IntegrationStatus
from build_notifier.utils import (
    is_special_use_domain,
    normalize_address,
    normalize_enum_key,
    property_to_string,
)


class TestPropertyToString:
    """Tests for property_to_string."""

    def test_scalars(self):
        """Test strings, numbers and None."""
        assert property_to_string("Foo") == "Foo"
        assert property_to_string(42) == "42"
        assert property_to_string(None) == ""

    def test_enum_uses_value(self):
        """Test that enums render as their value."""
        assert property_to_string(IntegrationStatus.FAILURE) == "failure"

    def test_dates_use_iso_format(self):
        """Test ISO-8601 rendering of dates and datetimes."""
        assert property_to_string(date(2026, 10, 18)) == "2026-10-18"
        assert property_to_string(datetime(2026, 10, 18, 9, 30)) == "2026-10-18T09:30:00"

    def test_single_item_list_not_quoted(self):
        """Test that a one-element list renders bare."""
        assert property_to_string(["alice"]) == "alice"

    def test_multi_item_list_quoted(self):
        """Test that multi-element lists are joined and quoted."""
        assert property_to_string(["alice", "bob"]) == '"alice,bob"'
        assert property_to_string(("alice", "bob"), delimiter=";") == '"alice;bob"'

    def test_empty_list(self):
        """Test that an empty list renders as an empty string."""
        assert property_to_string([]) == ""


class TestCaseInsensitiveEnum:
    """Tests for enum key normalization and parsing."""

    @pytest.mark.parametrize("raw", ["StillBroken", "still_broken", "still-broken", " STILL BROKEN "])
    def test_normalize_enum_key(self, raw):
        """Test that spelling variants normalize to the same key."""
        assert normalize_enum_key(raw) == "stillbroken"

    def test_parse_any_casing(self):
        """Test lookup regardless of casing."""
        assert IntegrationStatus("Success") is IntegrationStatus.SUCCESS
        assert IntegrationStatus.parse("EXCEPTION") is IntegrationStatus.EXCEPTION

    def test_parse_unknown_value(self):
        """Test the error for values outside the enumeration."""
        with pytest.raises(ValueError) as exc_info:
            IntegrationStatus.parse("cancelled")

        assert "cancelled" in str(exc_info.value)
        assert "success" in str(exc_info.value)


class TestNormalizeAddress:
    """Tests for e-mail address normalization."""

    def test_public_domain_lowercased(self):
        """Test that the domain of a public address is normalized."""
        assert normalize_address(" alice@Example.COM ") == "alice@example.com"

    @pytest.mark.parametrize(
        "address, expected",
        [
            ("ops@Corp.Local", "ops@corp.local"),
            ("ops@mailhost", "ops@mailhost"),
            ("ops@build.test", "ops@build.test"),
            ("ops@localhost", "ops@localhost"),
        ],
    )
    def test_intranet_domains_accepted(self, address, expected):
        """Test that special-use and dotless domains are accepted."""
        assert normalize_address(address) == expected

    @pytest.mark.parametrize("address", ["alice", "@example.com", "alice@", "a b@corp.local"])
    def test_invalid_addresses_rejected(self, address):
        """Test that malformed addresses raise ValueError."""
        with pytest.raises(ValueError):
            normalize_address(address)

    def test_special_use_detection(self):
        """Test special-use domain detection."""
        assert is_special_use_domain("corp.local") is True
        assert is_special_use_domain("LOCALHOST") is True
        assert is_special_use_domain("example.com") is False

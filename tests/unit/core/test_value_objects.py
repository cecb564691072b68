"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import Email, LicenseStatus


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        email = Email("jane@example.com")
        assert str(email) == "jane@example.com"

    @pytest.mark.parametrize("value", ["", "invalid-email", "a@b", "two@@example.com", "sp ace@example.com"])
    def test_invalid_email(self, value):
        with pytest.raises(ValueError, match="Invalid email"):
            Email(value)

    def test_equality_by_value(self):
        assert Email("a@example.com") == Email("a@example.com")
        assert Email("a@example.com") != Email("b@example.com")


class TestLicenseStatus:
    """Tests for LicenseStatus enum."""

    def test_values(self):
        assert LicenseStatus.values() == ["active", "suspended", "expired"]

    def test_str(self):
        assert f"{LicenseStatus.SUSPENDED}" == "suspended"

    def test_parse_known(self):
        assert LicenseStatus.parse(" Active ") is LicenseStatus.ACTIVE

    @pytest.mark.parametrize("value", [None, "", "refunded"])
    def test_parse_unknown(self, value):
        assert LicenseStatus.parse(value) is None

"""
Unit tests for License and Customer entities.
"""
import re

import pytest

from core.domain.value_objects import LicenseStatus
from customers.domain.customer import Customer
from licenses.domain.license import License
from licenses.domain.license_key import KEY_ALPHABET, generate_license_key, normalize_license_key

KEY_PATTERN = re.compile(r"^AFP(-[A-HJ-NP-Z2-9]{4}){4}$")


class TestLicenseKey:
    """Tests for license key generation."""

    def test_format(self):
        key = generate_license_key("AFP")
        assert KEY_PATTERN.match(key), key

    def test_no_look_alike_characters(self):
        for ambiguous in "01ILO":
            assert ambiguous not in KEY_ALPHABET

    def test_keys_are_unique(self):
        keys = {generate_license_key("AFP") for _ in range(500)}
        assert len(keys) == 500

    def test_prefix_is_normalised(self):
        assert generate_license_key(" xy ").startswith("XY-")
        assert len(generate_license_key("").split("-")) == 4

    def test_normalize(self):
        assert normalize_license_key("  AFP-AAAA-BBBB-CCCC-DDDD\n") == "AFP-AAAA-BBBB-CCCC-DDDD"
        assert normalize_license_key(None) == ""


class TestCustomer:
    """Tests for Customer entity."""

    def test_create(self):
        customer = Customer.create(email=" jane@example.com ", name="Jane Doe", country="no")

        assert customer.id
        assert customer.email == "jane@example.com"
        assert customer.country == "NO"
        assert customer.external_customer_ref == ""
        assert customer.created_at.tzinfo is not None
        assert customer.created_at == customer.updated_at

    def test_invalid_email(self):
        with pytest.raises(ValueError, match="Invalid email"):
            Customer.create(email="not-an-email")

    def test_first_name(self):
        assert Customer.create(email="a@example.com", name="Jane Q Doe").first_name == "Jane"
        assert Customer.create(email="a@example.com").first_name == ""

    def test_is_immutable(self):
        customer = Customer.create(email="a@example.com")
        with pytest.raises(AttributeError):
            customer.email = "b@example.com"  # type: ignore


class TestLicense:
    """Tests for License entity."""

    def test_create_defaults(self, sample_customer):
        license = License.create(customer_id=sample_customer.id)

        assert license.status == "active"
        assert license.is_active() is True
        assert license.product_name == "v1"
        assert KEY_PATTERN.match(license.key)
        assert license.purchase_session_id == ""

    def test_create_from_purchase(self, sample_license, sample_customer):
        assert sample_license.customer_id == sample_customer.id
        assert sample_license.version == "1.2.0"
        assert sample_license.currency == "usd"
        assert sample_license.price_paid == 4900

    def test_requires_customer(self):
        with pytest.raises(ValueError, match="Customer ID"):
            License.create(customer_id="")

    def test_status_transitions_return_new_instances(self, sample_license):
        suspended = sample_license.suspend()

        assert suspended.status == LicenseStatus.SUSPENDED.value
        assert suspended.is_active() is False
        assert sample_license.is_active() is True
        assert suspended.key == sample_license.key
        assert suspended.with_status(LicenseStatus.EXPIRED).status == "expired"
        assert suspended.with_status(LicenseStatus.ACTIVE).is_active() is True

    def test_unknown_status_is_not_active(self, sample_license):
        from dataclasses import replace

        assert replace(sample_license, status="cancelled").is_active() is False
        assert replace(sample_license, status="").is_active() is False

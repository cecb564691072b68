"""
Pytest configuration and shared fixtures.
"""

import asyncio
import hashlib
import hmac
import json
import time

import pytest

from core.domain.exceptions import NotificationError
from core.infrastructure.rate_limiter import reset_rate_limiter
from customers.domain.customer import Customer
from licenses.domain.license import License
from licenses.infrastructure.storage.factory import reset_storage
from licenses.infrastructure.storage.memory import MemoryStorage
from notifications.ports.notifier import Notifier


class RecordingNotifier(Notifier):
    """Notifier that keeps every message in memory."""

    def __init__(self):
        self.sent = []

    async def send(self, to: str, subject: str, body: str) -> None:
        self.sent.append({"to": to, "subject": subject, "body": body})


class FailingNotifier(Notifier):
    """Notifier whose delivery always fails."""

    def __init__(self):
        self.attempts = 0

    async def send(self, to: str, subject: str, body: str) -> None:
        self.attempts += 1
        raise NotificationError("SMTP server unavailable")


class SlowNotifier(Notifier):
    """Notifier that never finishes within a short timeout."""

    async def send(self, to: str, subject: str, body: str) -> None:
        await asyncio.sleep(5)


@pytest.fixture(autouse=True)
def reset_process_state():
    """Give every test a fresh rate limiter and storage."""
    reset_rate_limiter()
    reset_storage()
    yield
    reset_rate_limiter()
    reset_storage()


@pytest.fixture
def memory_storage():
    """Fixture for an empty MemoryStorage."""
    return MemoryStorage()


@pytest.fixture
def recording_notifier():
    return RecordingNotifier()


@pytest.fixture
def failing_notifier():
    return FailingNotifier()


@pytest.fixture
def slow_notifier():
    return SlowNotifier()


@pytest.fixture
def sample_customer():
    """Fixture for a sample Customer entity."""
    return Customer.create(
        email="jane@example.com",
        name="Jane Doe",
        country="no",
        external_customer_ref="cus_123",
    )


@pytest.fixture
def sample_license(sample_customer):
    """Fixture for a sample License entity owned by sample_customer."""
    return License.create(
        customer_id=sample_customer.id,
        product_id="prod_focus",
        product_name="Lifetime",
        version="1.2.0",
        price_paid=4900,
        currency="usd",
        purchase_session_id="cs_test_123",
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


def stripe_signature_header(payload: str, secret: str, timestamp: int = None) -> str:
    """Build a Stripe-Signature header the way Stripe signs deliveries."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.{payload}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


def checkout_completed_event(
    email: str = "new@example.com",
    session_id: str = "cs_test_abc",
    name: str = "Ola Nordmann",
    license_version: str = "1.0.0",
    **overrides,
) -> str:
    """Serialized checkout.session.completed event."""
    session = {
        "id": session_id,
        "object": "checkout.session",
        "customer": "cus_abc",
        "customer_email": None,
        "customer_details": {
            "email": email,
            "name": name,
            "address": {"country": "NO"},
        },
        "amount_total": 14900,
        "currency": "nok",
        "metadata": {
            "product_id": "prod_focus",
            "license_version": license_version,
            "product_name": "Lifetime",
        },
    }
    session.update(overrides)
    return json.dumps(
        {
            "id": "evt_test_1",
            "object": "event",
            "type": "checkout.session.completed",
            "data": {"object": session},
        }
    )


@pytest.fixture
def stripe_signature():
    """Fixture returning the Stripe-Signature header builder."""
    return stripe_signature_header


@pytest.fixture
def checkout_event():
    """Fixture returning the checkout.session.completed payload builder."""
    return checkout_completed_event

"""
Stripe webhook verification and event mapping.

Signatures are checked with stripe.WebhookSignature before the payload is
trusted. Only checkout.session.completed events produce a provisioning
command; every other event type is acknowledged and ignored.
"""
import json
import logging
from typing import Any, Dict, Optional

import stripe

from core.domain.exceptions import (
    InvalidWebhookPayloadError,
    WebhookNotConfiguredError,
    WebhookVerificationError,
)
from core.domain.value_objects import Email
from licenses.application.commands.provision_license import PurchaseCompletedCommand

logger = logging.getLogger(__name__)

MAX_WEBHOOK_BODY_BYTES = 65536
CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"


class StripeWebhookVerifier:
    """Verifies Stripe-Signature headers and decodes events."""

    def __init__(
        self,
        secret: str,
        test_mode: bool = False,
        tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE,
    ):
        """
        Initialize verifier.

        Args:
            secret: Endpoint signing secret (whsec_...)
            test_mode: Skip signature verification entirely
            tolerance: Maximum age of a signed timestamp, in seconds
        """
        self.secret = secret
        self.test_mode = test_mode
        self.tolerance = tolerance

    def construct_event(self, payload: bytes, signature_header: Optional[str]) -> Dict[str, Any]:
        """
        Verify and decode a webhook delivery.

        Args:
            payload: Raw request body
            signature_header: Value of the Stripe-Signature header

        Returns:
            Decoded event

        Raises:
            InvalidWebhookPayloadError: If the body is too large or not a JSON event
            WebhookNotConfiguredError: If no secret is configured outside test mode
            WebhookVerificationError: If the signature does not match
        """
        if len(payload) > MAX_WEBHOOK_BODY_BYTES:
            raise InvalidWebhookPayloadError("Request body too large")

        try:
            text = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidWebhookPayloadError("Request body is not valid UTF-8") from e

        if self.test_mode:
            logger.warning("Stripe webhook test mode enabled, skipping signature verification")
        else:
            if not self.secret:
                raise WebhookNotConfiguredError("STRIPE_WEBHOOK_SECRET is not configured")
            try:
                stripe.WebhookSignature.verify_header(
                    text, signature_header or "", self.secret, self.tolerance
                )
            except stripe.SignatureVerificationError as e:
                raise WebhookVerificationError(f"Invalid webhook signature: {e}") from e

        try:
            event = json.loads(text)
        except ValueError as e:
            raise InvalidWebhookPayloadError("Request body is not valid JSON") from e
        if not isinstance(event, dict) or not event.get("type") or not isinstance(event["type"], str):
            raise InvalidWebhookPayloadError("Event type is missing")
        return event


def _object(value: Any, field: str) -> Dict[str, Any]:
    """Return value as a dict; null means an empty object."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidWebhookPayloadError(f"{field} must be an object")
    return value


def _string(value: Any, field: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidWebhookPayloadError(f"{field} must be a string")
    return value.strip()


def _customer_ref(value: Any) -> str:
    if isinstance(value, dict):
        return _string(value.get("id"), "customer.id")
    return _string(value, "customer")


def _amount(value: Any) -> int:
    # bool is an int subclass but never a valid amount
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidWebhookPayloadError("amount_total must be an integer")
    return value


def checkout_session_from_event(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract the checkout session object from a decoded event.

    Raises:
        InvalidWebhookPayloadError: If data or data.object is not an object
    """
    data = _object(event.get("data"), "data")
    return _object(data.get("object"), "data.object")


def checkout_session_to_command(session: Dict[str, Any]) -> PurchaseCompletedCommand:
    """
    Map a checkout session object to a provisioning command.

    Args:
        session: The data.object of a checkout.session.completed event

    Returns:
        PurchaseCompletedCommand

    Raises:
        InvalidWebhookPayloadError: If a field has the wrong type, or the
            session has no id or no usable customer email
    """
    session = _object(session, "data.object")
    details = _object(session.get("customer_details"), "customer_details")
    email = _string(details.get("email"), "customer_details.email") or _string(
        session.get("customer_email"), "customer_email"
    )
    if not email:
        raise InvalidWebhookPayloadError("No customer email in checkout session")
    try:
        Email(email)
    except ValueError as e:
        raise InvalidWebhookPayloadError(f"Invalid customer email in checkout session: {email!r}") from e

    session_id = _string(session.get("id"), "id")
    if not session_id:
        raise InvalidWebhookPayloadError("Checkout session id is missing")

    address = _object(details.get("address"), "customer_details.address")
    metadata = {
        str(key): "" if value is None else str(value)
        for key, value in _object(session.get("metadata"), "metadata").items()
    }

    return PurchaseCompletedCommand(
        email=email,
        purchase_session_id=session_id,
        external_customer_ref=_customer_ref(session.get("customer")),
        name=_string(details.get("name"), "customer_details.name"),
        country=_string(address.get("country"), "customer_details.address.country"),
        amount_total=_amount(session.get("amount_total")),
        currency=_string(session.get("currency"), "currency"),
        metadata=metadata,
    )

"""
Payment webhook views.

Stripe delivers purchase events here. The raw body is read before any
parsing so the signature is checked over exactly the bytes Stripe signed.
"""

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from licenses.application.handlers.provision_license_handler import ProvisionLicenseHandler
from licenses.infrastructure.storage.factory import get_storage
from notifications.infrastructure.email_notifier import EmailNotifier
from payments.infrastructure.stripe_webhook import (
    CHECKOUT_SESSION_COMPLETED,
    StripeWebhookVerifier,
    checkout_session_from_event,
    checkout_session_to_command,
)

logger = logging.getLogger(__name__)


def build_webhook_verifier() -> StripeWebhookVerifier:
    """Build the Stripe verifier; test mode is never honoured in production."""
    test_mode = settings.STRIPE_WEBHOOK_TEST_MODE and settings.ENVIRONMENT != "production"
    return StripeWebhookVerifier(secret=settings.STRIPE_WEBHOOK_SECRET, test_mode=test_mode)


def build_provision_handler() -> ProvisionLicenseHandler:
    """Build the provisioning handler from settings."""
    return ProvisionLicenseHandler(
        storage=get_storage(),
        notifier=EmailNotifier(),
        key_prefix=settings.LICENSE_KEY_PREFIX,
        notifier_timeout=settings.NOTIFIER_TIMEOUT_SECONDS,
        product_title=settings.LICENSE_PRODUCT_TITLE,
        support_email=settings.SUPPORT_EMAIL,
    )


class StripeWebhookView(APIView):
    """View for Stripe webhook deliveries."""

    @extend_schema(
        operation_id="stripe_webhook",
        summary="Stripe Webhook",
        description=(
            "Receives Stripe events signed with the Stripe-Signature header. "
            "checkout.session.completed provisions a customer and license and "
            "emails the key; other event types are acknowledged."
        ),
        tags=["Webhooks"],
        request=None,
        responses={
            200: inline_serializer("WebhookReceived", {"received": serializers.CharField()}),
            400: OpenApiResponse(description="Invalid signature or payload"),
            429: OpenApiResponse(description="Rate limit exceeded"),
            500: OpenApiResponse(description="Webhook not configured or provisioning failed"),
        },
    )
    def post(self, request: Request) -> Response:
        """Handle a Stripe event."""
        payload = request.body
        signature_header = request.META.get("HTTP_STRIPE_SIGNATURE")
        return async_to_sync(self._handle_event)(payload, signature_header)

    async def _handle_event(self, payload: bytes, signature_header) -> Response:
        """Async handler for a webhook delivery."""
        event = build_webhook_verifier().construct_event(payload, signature_header)
        event_type = event["type"]

        if event_type != CHECKOUT_SESSION_COMPLETED:
            logger.info("Ignoring Stripe event", extra={"event_type": event_type, "event_id": event.get("id")})
            return Response({"received": "true"})

        command = checkout_session_to_command(checkout_session_from_event(event))

        logger.info(
            "Processing checkout session",
            extra={"event_id": event.get("id"), "session_id": command.purchase_session_id},
        )
        result = await build_provision_handler().handle(command)

        logger.info(
            "Checkout session processed",
            extra={
                "session_id": command.purchase_session_id,
                "license_id": result.license.id,
                "created": result.created,
                "notified": result.notified,
            },
        )
        return Response({"received": "true"})

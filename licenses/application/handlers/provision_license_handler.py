"""
ProvisionLicenseHandler.

Handles the purchase completed command.
"""

import asyncio
import logging
from typing import Optional

from core.domain.exceptions import DuplicateEntityError, ProvisioningError, StorageError
from core.metrics import licenses_provisioned_total, notifications_failed_total
from customers.domain.customer import Customer
from licenses.application.commands.provision_license import PurchaseCompletedCommand
from licenses.application.dto.license_dto import ProvisionResultDTO
from licenses.application.services.license_email import (
    DEFAULT_PRODUCT_TITLE,
    DEFAULT_SUPPORT_EMAIL,
    render_license_email,
)
from licenses.domain.license import License
from licenses.ports.storage import Storage
from notifications.ports.notifier import Notifier

logger = logging.getLogger(__name__)


class ProvisionLicenseHandler:
    """Handler for PurchaseCompletedCommand."""

    def __init__(
        self,
        storage: Storage,
        notifier: Optional[Notifier] = None,
        key_prefix: str = "AFP",
        notifier_timeout: float = 10.0,
        product_title: str = DEFAULT_PRODUCT_TITLE,
        support_email: str = DEFAULT_SUPPORT_EMAIL,
    ):
        """Initialize handler with storage and notifier."""
        self.storage = storage
        self.notifier = notifier
        self.key_prefix = key_prefix
        self.notifier_timeout = notifier_timeout
        self.product_title = product_title
        self.support_email = support_email

    async def handle(self, command: PurchaseCompletedCommand) -> ProvisionResultDTO:
        """
        Handle purchase completed command.

        Provisioning is idempotent per purchase session: a session that
        already produced a license returns that license and sends nothing.

        Args:
            command: PurchaseCompletedCommand

        Returns:
            ProvisionResultDTO with customer and license

        Raises:
            ProvisioningError: If the customer or license cannot be stored
        """
        existing = await self.storage.find_license_by_purchase_session(command.purchase_session_id)
        if existing:
            logger.info(
                "Purchase session already provisioned",
                extra={"session_id": command.purchase_session_id, "license_id": existing.id},
            )
            customer = await self.storage.get_customer(existing.customer_id)
            return ProvisionResultDTO(customer=customer, license=existing, created=False, notified=False)

        try:
            customer = await self._find_or_create_customer(command)
        except StorageError as e:
            logger.error(
                "Failed to find or create customer",
                extra={"session_id": command.purchase_session_id, "error": str(e)},
            )
            raise ProvisioningError(f"Failed to find or create customer: {e.message}") from e

        license = License.create(
            customer_id=customer.id,
            product_id=command.product_id,
            product_name=command.product_name,
            version=command.license_version,
            price_paid=command.amount_total,
            currency=command.currency,
            purchase_session_id=command.purchase_session_id,
            key_prefix=self.key_prefix,
        )

        try:
            license = await self.storage.save_license(license)
        except DuplicateEntityError as e:
            winner = await self.storage.find_license_by_purchase_session(command.purchase_session_id)
            if winner is None:
                raise ProvisioningError(f"Failed to save license: {e.message}") from e
            logger.info(
                "Purchase session provisioned concurrently",
                extra={"session_id": command.purchase_session_id, "license_id": winner.id},
            )
            return ProvisionResultDTO(customer=customer, license=winner, created=False, notified=False)
        except StorageError as e:
            logger.error(
                "Failed to save license",
                extra={"session_id": command.purchase_session_id, "error": str(e)},
            )
            raise ProvisioningError(f"Failed to save license: {e.message}") from e

        licenses_provisioned_total.labels(product_id=license.product_id or "unknown").inc()
        logger.info(
            "License provisioned",
            extra={
                "customer_id": customer.id,
                "license_id": license.id,
                "product_id": license.product_id,
                "session_id": command.purchase_session_id,
            },
        )

        notified = await self._notify(command.email, customer, license)
        return ProvisionResultDTO(customer=customer, license=license, created=True, notified=notified)

    async def _find_existing_customer(self, command: PurchaseCompletedCommand) -> Optional[Customer]:
        customer = await self.storage.find_customer_by_email(command.email)
        if customer is None and command.external_customer_ref:
            # Returning Stripe customer checking out with a different address
            customer = await self.storage.find_customer_by_external_ref(command.external_customer_ref)
        return customer

    async def _find_or_create_customer(self, command: PurchaseCompletedCommand) -> Customer:
        customer = await self._find_existing_customer(command)
        if customer:
            return customer

        customer = Customer.create(
            email=command.email,
            name=command.name,
            country=command.country,
            external_customer_ref=command.external_customer_ref,
        )
        try:
            return await self.storage.save_customer(customer)
        except DuplicateEntityError:
            # Lost a race with another request for the same email or Stripe customer
            winner = await self._find_existing_customer(command)
            if winner is None:
                raise
            return winner

    async def _notify(self, recipient: str, customer: Customer, license: License) -> bool:
        if self.notifier is None:
            return False

        subject, body = render_license_email(
            customer,
            license,
            product_title=self.product_title,
            support_email=self.support_email,
        )
        try:
            await asyncio.wait_for(
                self.notifier.send(recipient, subject, body),
                timeout=self.notifier_timeout,
            )
        except Exception as e:
            notifications_failed_total.inc()
            logger.error(
                "Failed to send license email",
                extra={
                    "customer_id": customer.id,
                    "license_id": license.id,
                    "error": str(e) or type(e).__name__,
                },
            )
            return False

        logger.info("License email sent", extra={"customer_id": customer.id})
        return True

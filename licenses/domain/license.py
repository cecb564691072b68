"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import LicenseStatus
from licenses.domain.license_key import generate_license_key

DEFAULT_PRODUCT_NAME = "v1"


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents a single issued credential owned by a customer.
    The status is kept as a plain string so that values read back from
    storage are preserved even when they are not a known LicenseStatus.
    """

    id: str
    key: str
    customer_id: str
    product_id: str
    product_name: str
    version: str
    status: str
    price_paid: int
    currency: str
    purchase_session_id: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.id:
            raise ValueError("License ID is required")
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.key) > 100:
            raise ValueError("License key too long")
        if not self.customer_id:
            raise ValueError("Customer ID is required")

    @classmethod
    def create(
        cls,
        customer_id: str,
        product_id: str = "",
        product_name: str = "",
        version: str = "",
        price_paid: int = 0,
        currency: str = "",
        purchase_session_id: str = "",
        key_prefix: str = "AFP",
        license_id: Optional[str] = None,
        key: Optional[str] = None,
    ) -> "License":
        """
        Create a new active License entity.

        Args:
            customer_id: Owning customer ID
            product_id: Product identifier from the purchase metadata
            product_name: Product display name (defaults to "v1")
            version: Semantic version the license was issued for
            price_paid: Amount paid in minor currency units
            currency: ISO currency code
            purchase_session_id: Checkout session that produced the license
            key_prefix: Prefix for the generated key
            license_id: Optional ID (generated if not provided)
            key: Optional key (generated if not provided)

        Returns:
            License entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or str(uuid.uuid4()),
            key=key or generate_license_key(key_prefix),
            customer_id=customer_id,
            product_id=product_id or "",
            product_name=product_name or DEFAULT_PRODUCT_NAME,
            version=version or "",
            status=LicenseStatus.ACTIVE.value,
            price_paid=price_paid or 0,
            currency=(currency or "").lower(),
            purchase_session_id=purchase_session_id or "",
            created_at=now,
            updated_at=now,
        )

    def is_active(self) -> bool:
        """Return True if the license status is active."""
        return self.status == LicenseStatus.ACTIVE.value

    def with_status(self, status: LicenseStatus) -> "License":
        """
        Create a new License instance with the given status.

        Args:
            status: New status

        Returns:
            New License instance
        """
        return replace(self, status=status.value, updated_at=datetime.now(timezone.utc))

    def suspend(self) -> "License":
        """Return a suspended copy of this license."""
        return self.with_status(LicenseStatus.SUSPENDED)

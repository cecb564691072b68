"""
Customer domain entity.

A customer is the identity record for a purchaser. Customers are created
once, on their first purchase, and are looked up by email afterwards.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email


@dataclass(frozen=True)
class Customer:
    """
    Customer domain entity.

    This is an immutable value object; updates return new instances.
    """

    id: str
    email: str
    name: str
    country: str
    external_customer_ref: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate customer entity."""
        if not self.id or len(self.id.strip()) == 0:
            raise ValueError("Customer ID is required")
        Email(self.email)

    @classmethod
    def create(
        cls,
        email: str,
        name: str = "",
        country: str = "",
        external_customer_ref: str = "",
        customer_id: Optional[str] = None,
    ) -> "Customer":
        """
        Create a new Customer entity.

        Args:
            email: Customer email address
            name: Optional display name
            country: Optional ISO country code
            external_customer_ref: Payment processor customer ID, if known
            customer_id: Optional ID (generated if not provided)

        Returns:
            Customer entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=customer_id or str(uuid.uuid4()),
            email=email.strip(),
            name=(name or "").strip(),
            country=(country or "").strip().upper(),
            external_customer_ref=(external_customer_ref or "").strip(),
            created_at=now,
            updated_at=now,
        )

    @property
    def first_name(self) -> str:
        """Return the first word of the display name, or an empty string."""
        parts = self.name.split()
        return parts[0] if parts else ""

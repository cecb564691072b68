"""
PurchaseCompletedCommand.

Command to provision a customer and license for a completed purchase.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class PurchaseCompletedCommand:
    """
    Command to provision a license for a completed checkout.

    This command creates:
    - A customer, unless one with the same email exists
    - One license tied to the checkout session
    """

    email: str
    purchase_session_id: str
    external_customer_ref: str = ""
    name: str = ""
    country: str = ""
    amount_total: int = 0
    currency: str = ""
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def product_id(self) -> str:
        return self.metadata.get("product_id", "")

    @property
    def license_version(self) -> str:
        return self.metadata.get("license_version", "")

    @property
    def product_name(self) -> str:
        return self.metadata.get("product_name", "")

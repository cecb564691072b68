"""
License DTOs for API responses.
"""
from dataclasses import dataclass

from customers.domain.customer import Customer
from licenses.domain.license import License


@dataclass
class ValidationVerdict:
    """DTO for a signed validation verdict."""

    valid: bool
    message: str
    timestamp: int
    signature: str


@dataclass
class ProvisionResultDTO:
    """DTO for the outcome of provisioning a purchase."""

    customer: Customer
    license: License
    created: bool  # False when the purchase session was already provisioned
    notified: bool

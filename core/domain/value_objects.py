"""
Value objects shared by the customer and license domains.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Deliberately loose: one "@", something on both sides, a dot in the domain
_EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


@dataclass(frozen=True)
class Email:
    """Email address checked for a plausible shape on construction."""

    value: str

    def __post_init__(self):
        if not self.value or not _EMAIL_PATTERN.fullmatch(self.value):
            raise ValueError(f"Invalid email address: {self.value!r}")

    def __str__(self) -> str:
        return self.value


class LicenseStatus(Enum):
    """
    Statuses an operator can assign to a license.

    Only ACTIVE admits a license during validation. Stored values outside
    this set are kept verbatim and behave like any other inactive status.
    """

    ACTIVE = "active"
    SUSPENDED = "suspended"
    EXPIRED = "expired"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def values(cls) -> list:
        """Return all known status strings."""
        return [status.value for status in cls]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["LicenseStatus"]:
        """
        Look up a stored status string.

        Args:
            value: Raw status as read from storage

        Returns:
            Matching LicenseStatus, or None for empty and unknown values
        """
        normalized = (value or "").strip().lower()
        for status in cls:
            if status.value == normalized:
                return status
        return None

"""
ValidateLicenseQuery.

Query to check whether a license key may be used by a client.
"""
from dataclasses import dataclass


@dataclass
class ValidateLicenseQuery:
    """Query to validate a license key for a client version."""

    license_key: str
    app_version: str = ""

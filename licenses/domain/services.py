"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
from typing import Optional, Tuple

from licenses.domain.license import License
from licenses.domain.version import InvalidVersionError, is_compatible

MESSAGE_VALID = "license valid"
MESSAGE_NOT_FOUND = "license not found"
MESSAGE_NOT_ACTIVE = "license not active"
MESSAGE_INVALID_VERSION = "invalid version format"
MESSAGE_INCOMPATIBLE_VERSION = "license version incompatible"


class LicenseValidator:
    """Domain service for license validation."""

    def __init__(self, check_version: bool = True):
        """
        Initialize validator.

        Args:
            check_version: Compare the license major version with the
                client version when True
        """
        self.check_version = check_version

    def evaluate(self, license: Optional[License], app_version: str = "") -> Tuple[bool, str]:
        """
        Decide the verdict for a looked-up license.

        Args:
            license: License entity, or None when the key is unknown
            app_version: Version reported by the client

        Returns:
            Tuple of (is_valid, message)
        """
        if license is None:
            return False, MESSAGE_NOT_FOUND

        if not license.is_active():
            return False, MESSAGE_NOT_ACTIVE

        if self.check_version:
            try:
                compatible = is_compatible(license.version, app_version)
            except InvalidVersionError:
                return False, MESSAGE_INVALID_VERSION
            if not compatible:
                return False, MESSAGE_INCOMPATIBLE_VERSION

        return True, MESSAGE_VALID

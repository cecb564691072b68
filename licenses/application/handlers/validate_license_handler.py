"""
ValidateLicenseHandler.

Handles the validate license query.
"""
import logging
import time
from typing import Callable, Optional

from core.domain.exceptions import InvalidRequestError
from core.metrics import license_validations_total
from licenses.application.dto.license_dto import ValidationVerdict
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.domain.license_key import normalize_license_key
from licenses.domain.services import LicenseValidator
from licenses.domain.signing import ResponseSigner
from licenses.ports.storage import Storage

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseQuery."""

    def __init__(
        self,
        storage: Storage,
        signer: ResponseSigner,
        validator: Optional[LicenseValidator] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize handler with storage and signer."""
        self.storage = storage
        self.signer = signer
        self.validator = validator or LicenseValidator()
        self.clock = clock

    async def handle(self, query: ValidateLicenseQuery) -> ValidationVerdict:
        """
        Handle validate license query.

        Negative outcomes (unknown key, inactive license, version mismatch)
        are verdicts, not errors.

        Args:
            query: ValidateLicenseQuery

        Returns:
            Signed ValidationVerdict

        Raises:
            InvalidRequestError: If the license key is empty
            StorageError: If the lookup fails
        """
        license_key = normalize_license_key(query.license_key)
        if not license_key:
            raise InvalidRequestError("invalid license")

        license = await self.storage.find_license_by_key(license_key)
        valid, message = self.validator.evaluate(license, query.app_version or "")

        timestamp = int(self.clock())
        signature = self.signer.sign(valid, message, timestamp)

        license_validations_total.labels(result="valid" if valid else "invalid").inc()
        logger.info(
            "License validated",
            extra={
                "valid": valid,
                "verdict": message,
                "license_id": license.id if license else None,
                "app_version": query.app_version,
            },
        )

        return ValidationVerdict(
            valid=valid,
            message=message,
            timestamp=timestamp,
            signature=signature,
        )

"""
Django management command to change the status of a license.

Statuses only change through explicit operator action; nothing in the
service expires or suspends a license on its own.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.value_objects import LicenseStatus
from licenses.infrastructure.storage.factory import get_storage

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to suspend, expire or reactivate a license."""

    help = "Set the status of a license identified by its key"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("license_key", help="License key, e.g. AFP-ABCD-EFGH-JKMN-PQRS")
        parser.add_argument("status", choices=LicenseStatus.values(), help="New status")

    def handle(self, *args, **options):
        """Execute the command."""
        async_to_sync(self._set_status)(options["license_key"].strip(), LicenseStatus(options["status"]))

    async def _set_status(self, license_key: str, status: LicenseStatus) -> None:
        storage = get_storage()
        license = await storage.find_license_by_key(license_key)
        if license is None:
            raise CommandError(f"License {license_key} not found")

        if LicenseStatus.parse(license.status) is status:
            self.stdout.write(f"License {license_key} is already {status}")
            return

        previous = license.status
        await storage.save_license(license.with_status(status))
        logger.info(
            "License status changed",
            extra={"license_id": license.id, "from_status": previous, "to_status": status.value},
        )
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"License {license_key}: {previous} -> {status}"))

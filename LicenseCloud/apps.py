"""
App configuration for License Cloud.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Commands that never serve traffic and should not start the exporter
_SKIP_COMMANDS = {"migrate", "makemigrations", "shell", "test", "check", "set_license_status"}


class LicenseCloudConfig(AppConfig):
    """App configuration for LicenseCloud."""

    name = "LicenseCloud"
    verbose_name = "License Cloud"

    def ready(self):
        """Called when Django starts."""
        self.check_configuration()

        if len(sys.argv) > 1 and sys.argv[1] in _SKIP_COMMANDS:
            return
        # Django's autoreloader imports the project twice
        if os.environ.get("RUN_MAIN") == "false":
            return

        if not getattr(self, "_initialized", False):
            from core.instrumentation import setup_metrics_exporter

            setup_metrics_exporter()
            self._initialized = True

    def check_configuration(self):
        """Log settings that are unsafe outside production."""
        if not settings.LICENSE_HMAC_SECRET:
            logger.warning("LICENSE_HMAC_SECRET is not set, validation responses use the insecure default secret")
        if settings.STRIPE_WEBHOOK_TEST_MODE:
            if settings.ENVIRONMENT == "production":
                logger.error("STRIPE_WEBHOOK_TEST_MODE is ignored in production")
            else:
                logger.warning("Stripe webhook signature verification is disabled (test mode)")
        elif not settings.STRIPE_WEBHOOK_SECRET:
            logger.warning("STRIPE_WEBHOOK_SECRET is not set, webhook deliveries will be rejected")

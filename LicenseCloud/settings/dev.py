"""
Development settings for LicenseCloud.
"""

import os

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = True

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Accept unsigned webhooks locally unless told otherwise
STRIPE_WEBHOOK_TEST_MODE = env_bool("STRIPE_WEBHOOK_TEST_MODE", True)  # noqa: F405

# Email backend for development
EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
LOGGING = get_logging_config(ENVIRONMENT, LOG_LEVEL)

"""
Test settings for LicenseCloud.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

ENVIRONMENT = "test"

ALLOWED_HOSTS = ["testserver", "localhost"]

# Use in-memory SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

LICENSE_STORAGE_BACKEND = "sql"
LICENSE_HMAC_SECRET = "test-hmac-secret"
LICENSE_VERSION_CHECK = True
LICENSE_KEY_PREFIX = "AFP"

STRIPE_WEBHOOK_SECRET = "whsec_test_secret"
STRIPE_WEBHOOK_TEST_MODE = False

RATE_LIMIT_REQUESTS = 10
RATE_LIMIT_WINDOW_SECONDS = 60

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
NOTIFIER_TIMEOUT_SECONDS = 5

PROMETHEUS_PORT = 0

# Disable logging during tests
LOGGING_CONFIG = None

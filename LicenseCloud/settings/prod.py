"""
Production settings for LicenseCloud.
"""

import os

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403, F401

DEBUG = False

ENVIRONMENT = os.environ.get("ENVIRONMENT", "production")

# Security settings
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
X_FRAME_OPTIONS = "DENY"

if not os.environ.get("SECRET_KEY"):
    raise ImproperlyConfigured("SECRET_KEY must be set in production")

if not LICENSE_HMAC_SECRET:  # noqa: F405
    raise ImproperlyConfigured("LICENSE_HMAC_SECRET must be set in production")

if STRIPE_WEBHOOK_TEST_MODE:  # noqa: F405
    raise ImproperlyConfigured("STRIPE_WEBHOOK_TEST_MODE cannot be enabled in production")

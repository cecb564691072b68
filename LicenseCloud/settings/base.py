"""
Base Django settings for LicenseCloud.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config


def env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value not in (None, "") else default


# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.environ.get("ENVIRONMENT", "production")

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-3k!v1q9l#r0c@license-cloud-local-only")

DEBUG = False

ALLOWED_HOSTS = [h for h in os.environ.get("ALLOWED_HOSTS", "*").split(",") if h]

# Application definition
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    # Third party
    "rest_framework",
    "drf_spectacular",
    # Local apps
    "LicenseCloud.apps.LicenseCloudConfig",
    "core",
    "customers",
    "licenses",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.metrics.MetricsMiddleware",
    "core.middleware.rate_limit.RateLimitMiddleware",
]

ROOT_URLCONF = "LicenseCloud.urls"

TEMPLATES = []

WSGI_APPLICATION = "LicenseCloud.wsgi.application"

# Database
# DB_ENGINE=sqlite (default) or postgresql
if os.environ.get("DB_ENGINE", "sqlite") == "postgresql":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("DB_NAME", "license_cloud"),
            "USER": os.environ.get("DB_USER", "postgres"),
            "PASSWORD": os.environ.get("DB_PASSWORD", ""),
            "HOST": os.environ.get("DB_HOST", "localhost"),
            "PORT": os.environ.get("DB_PORT", "5432"),
            "OPTIONS": {
                "connect_timeout": 10,
            },
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.environ.get("DB_NAME", str(BASE_DIR / "licenses.db")),
            "OPTIONS": {
                "timeout": 20,
            },
        }
    }

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "License Cloud API",
    "DESCRIPTION": (
        "License issuance and validation service. "
        "Provisions license keys from Stripe checkout events and "
        "validates them for the desktop client."
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/v1",
    "TAGS": [
        {"name": "Licenses", "description": "Client-facing license validation"},
        {"name": "Webhooks", "description": "Payment processor events"},
    ],
}

# Storage backend: memory, file or sql
LICENSE_STORAGE_BACKEND = os.environ.get("LICENSE_STORAGE_BACKEND", "sql")
LICENSE_STORAGE_PATH = os.environ.get("LICENSE_STORAGE_PATH", str(BASE_DIR / "licenses.json"))

# Licensing
LICENSE_HMAC_SECRET = os.environ.get("LICENSE_HMAC_SECRET", "")
LICENSE_VERSION_CHECK = env_bool("LICENSE_VERSION_CHECK", True)
LICENSE_KEY_PREFIX = os.environ.get("LICENSE_KEY_PREFIX", "AFP")
LICENSE_PRODUCT_TITLE = os.environ.get("LICENSE_PRODUCT_TITLE", "Auto-Focus+")
SUPPORT_EMAIL = os.environ.get("SUPPORT_EMAIL", "help@auto-focus.app")

# Stripe
STRIPE_WEBHOOK_SECRET = os.environ.get("STRIPE_WEBHOOK_SECRET", "")
STRIPE_WEBHOOK_TEST_MODE = env_bool("STRIPE_WEBHOOK_TEST_MODE", False)

# Rate limiting
RATE_LIMIT_REQUESTS = env_int("RATE_LIMIT_REQUESTS", 10)
RATE_LIMIT_WINDOW_SECONDS = env_int("RATE_LIMIT_WINDOW_SECONDS", 60)
RATE_LIMITED_PATHS = [
    "/v1/licenses/validate",
    "/v1/webhooks/stripe",
]

# Email
EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.environ.get("EMAIL_HOST", "localhost")
EMAIL_PORT = env_int("EMAIL_PORT", 587)
EMAIL_HOST_USER = os.environ.get("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.environ.get("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = env_bool("EMAIL_USE_TLS", True)
EMAIL_TIMEOUT = env_int("EMAIL_TIMEOUT", 10)
DEFAULT_FROM_EMAIL = os.environ.get("DEFAULT_FROM_EMAIL", "licenses@auto-focus.app")
NOTIFIER_TIMEOUT_SECONDS = env_int("NOTIFIER_TIMEOUT_SECONDS", 15)

# Observability
PROMETHEUS_PORT = env_int("PROMETHEUS_PORT", 0)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOGGING = get_logging_config(ENVIRONMENT, LOG_LEVEL)

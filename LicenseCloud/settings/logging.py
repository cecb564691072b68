"""
Logging configuration for structured JSON logging.

Records are rendered as one JSON object per line. Extra fields whose names
look like credentials are redacted before formatting.
"""

import logging
import sys

from pythonjsonlogger import jsonlogger

SENSITIVE_FIELD_MARKERS = (
    "key",
    "token",
    "secret",
    "password",
    "api_key",
    "signature",
    "authorization",
    "auth",
)

# Attributes every LogRecord carries; anything else came from extra={...}
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def redact(value) -> str:
    """Mask a sensitive value, keeping a short prefix and suffix of long values."""
    text = str(value)
    if len(text) <= 8:
        return "[REDACTED]"
    return f"{text[:3]}...{text[-3:]}"


def is_sensitive(field_name: str) -> bool:
    lowered = field_name.lower()
    return any(marker in lowered for marker in SENSITIVE_FIELD_MARKERS)


class SensitiveDataFilter(logging.Filter):
    """Redacts credential-like extra fields on log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, value in list(vars(record).items()):
            if name in _RESERVED_ATTRS or value is None:
                continue
            if is_sensitive(name):
                setattr(record, name, redact(value))
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds the level name and service name."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record.setdefault("service", "license-cloud")


def get_logging_config(environment: str = "production", log_level: str = "INFO") -> dict:
    """
    Get logging configuration for the application.

    Args:
        environment: Environment name (development, production, test)
        log_level: Level for application loggers

    Returns:
        Django logging configuration dictionary
    """
    log_level = (log_level or "INFO").upper()
    app_logger = {
        "handlers": ["console"],
        "level": log_level,
        "propagate": False,
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "static_fields": {"environment": environment},
            },
        },
        "filters": {
            "sensitive": {
                "()": SensitiveDataFilter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "filters": ["sensitive"],
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "core": dict(app_logger),
            "api": dict(app_logger),
            "licenses": dict(app_logger),
            "customers": dict(app_logger),
            "notifications": dict(app_logger),
            "payments": dict(app_logger),
        },
    }

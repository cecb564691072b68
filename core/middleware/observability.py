"""
Request logging middleware.

Every request gets a correlation id, either the caller's X-Correlation-ID
or a fresh one, which is attached to the request for the exception handler
and echoed on the response. One structured log line is written per request.
"""

import logging
import re
import time
import uuid
from typing import Callable

from django.http import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Caller supplied ids end up in logs and response headers
_CORRELATION_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,64}")


def resolve_correlation_id(raw: str) -> str:
    """Return raw when it is a safe correlation id, otherwise a new uuid4."""
    raw = (raw or "").strip()
    if _CORRELATION_ID_PATTERN.fullmatch(raw):
        return raw
    return uuid.uuid4().hex


class ObservabilityMiddleware:
    """Correlation ids and per-request access logging."""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = resolve_correlation_id(request.META.get("HTTP_X_CORRELATION_ID", ""))
        request.correlation_id = correlation_id  # type: ignore

        started = time.monotonic()
        try:
            response = self.get_response(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    **self._request_fields(request, correlation_id, started),
                    "error": str(e),
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            raise

        fields = self._request_fields(request, correlation_id, started)
        fields["status_code"] = response.status_code
        if response.status_code >= 500:
            logger.error("HTTP request", extra=fields)
        elif response.status_code >= 400:
            logger.warning("HTTP request", extra=fields)
        else:
            logger.info("HTTP request", extra=fields)

        response[CORRELATION_HEADER] = correlation_id
        return response

    @staticmethod
    def _request_fields(request: HttpRequest, correlation_id: str, started: float) -> dict:
        return {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
            "user_agent": request.META.get("HTTP_USER_AGENT", ""),
            "duration_ms": round((time.monotonic() - started) * 1000, 2),
        }

"""
Rate limiting middleware.

Applies the fixed window limiter to the public endpoints, keyed by
the client's remote address.
"""

import logging
from typing import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.infrastructure.rate_limiter import get_rate_limiter
from core.metrics import errors_total

logger = logging.getLogger(__name__)


class RateLimitMiddleware:
    """
    Rate limiting middleware per remote address.

    Only paths listed in RATE_LIMITED_PATHS are limited; health and
    schema endpoints pass through untouched.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def _get_client_key(self, request: HttpRequest) -> str:
        """
        Extract the limiting key from request.

        Args:
            request: HTTP request

        Returns:
            Remote address, or "unknown" when the server did not set one
        """
        return request.META.get("REMOTE_ADDR") or "unknown"

    def _is_limited_path(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in settings.RATE_LIMITED_PATHS)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request with rate limiting.

        Args:
            request: HTTP request

        Returns:
            HTTP response, 429 when the client exceeded its window
        """
        if not self._is_limited_path(request.path):
            return self.get_response(request)

        client_key = self._get_client_key(request)
        limiter = get_rate_limiter()
        if limiter.allow(client_key):
            response = self.get_response(request)
            response["X-RateLimit-Limit"] = str(limiter.max_requests)
            response["X-RateLimit-Remaining"] = str(limiter.remaining(client_key))
            return response

        logger.warning(
            "Rate limit exceeded",
            extra={
                "remote_addr": client_key,
                "path": request.path,
                "method": request.method,
                "user_agent": request.META.get("HTTP_USER_AGENT", ""),
            },
        )
        errors_total.labels(error_type="rate_limit_exceeded", endpoint=request.path).inc()

        response = JsonResponse(
            {
                "error": {
                    "code": "RATE_LIMIT_EXCEEDED",
                    "message": "Rate limit exceeded",
                }
            },
            status=429,
        )
        response["Retry-After"] = str(int(settings.RATE_LIMIT_WINDOW_SECONDS))
        response["X-RateLimit-Limit"] = str(limiter.max_requests)
        response["X-RateLimit-Remaining"] = "0"
        return response

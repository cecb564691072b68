"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every error body uses the envelope {"error": {"code": ..., "message": ...}}.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    DomainException,
    InvalidRequestError,
    ProvisioningError,
    StorageError,
    WebhookException,
    WebhookNotConfiguredError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    correlation_id = _get_correlation_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, correlation_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        detail = exc.default_detail
        if isinstance(response.data, dict):
            detail = response.data.get("detail", detail)
        response.data = {
            "error": {
                "code": str(exc.default_code).upper().replace("-", "_"),
                "message": str(detail),
            }
        }
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, correlation_id)

    if correlation_id:
        response["X-Correlation-ID"] = correlation_id
    return response


def _get_correlation_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract correlation ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "correlation_id", None)


def _endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return request.path if request is not None else "unknown"


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], correlation_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    if isinstance(exc, (StorageError, ProvisioningError, WebhookNotConfiguredError)):
        errors_total.labels(error_type=exc.code, endpoint=_endpoint(context)).inc()
        logger.error(
            "Domain exception: %s - %s",
            exc.code,
            exc.message,
            extra={"correlation_id": correlation_id},
            exc_info=exc,
        )
        message = exc.message if isinstance(exc, WebhookNotConfiguredError) else INTERNAL_ERROR_MESSAGE
        return Response(
            {"error": {"code": exc.code, "message": message}},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, (InvalidRequestError, WebhookException)):
        errors_total.labels(error_type=exc.code, endpoint=_endpoint(context)).inc()

    logger.warning(
        "Domain exception: %s - %s", exc.code, exc.message, extra={"correlation_id": correlation_id}
    )
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status.HTTP_400_BAD_REQUEST)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], correlation_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    logger.error("Unexpected error: %s", exc, extra={"correlation_id": correlation_id}, exc_info=exc)
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": INTERNAL_ERROR_MESSAGE}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

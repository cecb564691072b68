"""
License API views.

These endpoints are used by the desktop client to:
- Validate a license key on startup and periodically
"""

from functools import lru_cache

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.exceptions import MethodNotAllowed, ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.licenses.serializers import (
    ValidateLicenseRequestSerializer,
    ValidationVerdictSerializer,
)
from core.domain.exceptions import InvalidRequestError
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.domain.services import LicenseValidator
from licenses.domain.signing import ResponseSigner
from licenses.infrastructure.storage.factory import get_storage


@lru_cache(maxsize=4)
def _signer_for(secret: str) -> ResponseSigner:
    return ResponseSigner(secret)


def build_validate_handler() -> ValidateLicenseHandler:
    """Build the validation handler from settings."""
    return ValidateLicenseHandler(
        storage=get_storage(),
        signer=_signer_for(settings.LICENSE_HMAC_SECRET or ""),
        validator=LicenseValidator(check_version=settings.LICENSE_VERSION_CHECK),
    )


class ValidateLicenseView(APIView):
    """View for validating a license key."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Check a license key for the given client version. Every verdict, "
            "including negative ones, is returned with status 200 and an HMAC "
            "signature over valid, message and timestamp."
        ),
        tags=["Licenses"],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidationVerdictSerializer,
            400: OpenApiResponse(description="Malformed body or empty license key"),
            405: OpenApiResponse(description="Method not allowed"),
            429: OpenApiResponse(description="Rate limit exceeded"),
            500: OpenApiResponse(description="Storage failure"),
        },
    )
    def post(self, request: Request) -> Response:
        """Validate a license key."""
        return async_to_sync(self._handle_validate_license)(request)

    def http_method_not_allowed(self, request, *args, **kwargs):
        raise MethodNotAllowed(request.method, detail="only POST allowed")

    async def _handle_validate_license(self, request: Request) -> Response:
        """Async handler for validate license."""
        try:
            data = request.data
        except ParseError as e:
            raise InvalidRequestError("invalid license") from e

        serializer = ValidateLicenseRequestSerializer(data=data)
        if not serializer.is_valid():
            raise InvalidRequestError("invalid license")

        handler = build_validate_handler()
        verdict = await handler.handle(
            ValidateLicenseQuery(
                license_key=serializer.validated_data["license_key"],
                app_version=serializer.validated_data["app_version"],
            )
        )
        return Response(ValidationVerdictSerializer(verdict).data)

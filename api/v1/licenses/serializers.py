"""
Serializers for license API endpoints.
"""

from rest_framework import serializers


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for validate license request."""

    license_key = serializers.CharField(required=False, allow_blank=True, default="", trim_whitespace=True)
    app_version = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)


class ValidationVerdictSerializer(serializers.Serializer):
    """Serializer for ValidationVerdict."""

    valid = serializers.BooleanField()
    message = serializers.CharField()
    timestamp = serializers.IntegerField(help_text="Unix time in seconds")
    signature = serializers.CharField(help_text='Base64 HMAC-SHA256 of "<valid>|<message>|<timestamp>"')

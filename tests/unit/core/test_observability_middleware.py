"""
Unit tests for ObservabilityMiddleware.
"""
import pytest
from django.http import HttpResponse
from django.test import RequestFactory

from core.middleware.observability import ObservabilityMiddleware, resolve_correlation_id


class TestResolveCorrelationId:
    def test_keeps_safe_ids(self):
        assert resolve_correlation_id("corr-123") == "corr-123"

    @pytest.mark.parametrize("raw", ["", "   ", "has space", "x" * 65, "line\nbreak"])
    def test_replaces_unsafe_ids(self, raw):
        generated = resolve_correlation_id(raw)
        assert generated != raw
        assert len(generated) == 32


class TestObservabilityMiddleware:
    def test_sets_header_and_request_attribute(self):
        seen = {}

        def view(request):
            seen["correlation_id"] = request.correlation_id
            return HttpResponse(status=204)

        request = RequestFactory().get("/v1/health", HTTP_X_CORRELATION_ID="abc-1")
        response = ObservabilityMiddleware(view)(request)

        assert seen["correlation_id"] == "abc-1"
        assert response["X-Correlation-ID"] == "abc-1"

    def test_exceptions_propagate(self):
        def view(request):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            ObservabilityMiddleware(view)(RequestFactory().get("/v1/health"))

"""
URL configuration for LicenseCloud project.
"""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

from core.views import HealthView

urlpatterns = [
    # Health check endpoint
    path("v1/health", HealthView.as_view(), name="health"),
    # API endpoints
    path("v1/licenses/", include("api.v1.licenses.urls")),
    path("v1/webhooks/", include("api.v1.webhooks.urls")),
    # OpenAPI Schema
    path("v1/schema/", SpectacularAPIView.as_view(), name="schema"),
]

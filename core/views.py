"""
Core views for health checks and system status.
"""

import logging
from datetime import datetime, timezone

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from licenses.infrastructure.storage.factory import get_storage

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint backed by a storage probe."""

    def get(self, _request):
        """Return service health status."""
        database = "ok"
        try:
            async_to_sync(get_storage().ping)()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Health check failed", extra={"error": str(e)}, exc_info=True)
            database = "error"

        return JsonResponse(
            {
                "status": database,
                "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
                "environment": settings.ENVIRONMENT or "production",
                "database": database,
            },
            status=200 if database == "ok" else 503,
        )

"""
Core views for health checks and system status.

These routes sit outside /api/v1/ and need no API key.
"""

import logging

from django.core.cache import cache
from django.core.files.storage import default_storage
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

logger = logging.getLogger(__name__)

SERVICE_NAME = "brand-catalog"


def check_database() -> bool:
    """Run a trivial query against the default database."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return True
    except DatabaseError as e:
        logger.warning("Database health check failed: %s", e)
        return False


def check_cache() -> bool:
    """Round-trip a value through the default cache."""
    try:
        cache.set("health_check", "ok", 10)
        return cache.get("health_check") == "ok"
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.warning("Cache health check failed: %s", e)
        return False


def check_storage() -> bool:
    """Whether the image storage backend answers."""
    try:
        default_storage.exists("health_check")
        return True
    except OSError as e:
        logger.warning("Storage health check failed: %s", e)
        return False


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": SERVICE_NAME})


@method_decorator(csrf_exempt, name="dispatch")
class HealthDBView(View):
    """Database health check endpoint."""

    def get(self, _request):
        """Check database connectivity."""
        if check_database():
            return JsonResponse({"status": "healthy", "database": "connected"})
        return JsonResponse({"status": "unhealthy", "database": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class HealthCacheView(View):
    """Cache health check endpoint."""

    def get(self, _request):
        """Check cache connectivity."""
        if check_cache():
            return JsonResponse({"status": "healthy", "cache": "connected"})
        return JsonResponse({"status": "unhealthy", "cache": "disconnected"}, status=503)


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {
            "database": check_database(),
            "cache": check_cache(),
            "storage": check_storage(),
        }

        all_healthy = all(checks.values())
        status_code = 200 if all_healthy else 503

        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
            },
            status=status_code,
        )

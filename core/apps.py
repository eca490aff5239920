"""
App configuration for the core app.
"""

import logging
import os

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """App configuration for core."""

    name = "core"
    verbose_name = "Core"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        """Configure tracing when an OTLP endpoint is set."""
        if not os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
            return

        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()

"""
App configuration for the brands app.
"""

from django.apps import AppConfig


class BrandsConfig(AppConfig):
    """App configuration for brands."""

    name = "brands"
    verbose_name = "Brands"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        """Subscribe brand event handlers once the app registry is loaded."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

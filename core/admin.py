"""
Django admin configuration for core app.
"""

from django.contrib import admin
from django.utils.html import format_html

from core.infrastructure.models import ApiKey


@admin.register(ApiKey)
class ApiKeyAdmin(admin.ModelAdmin):
    """Admin interface for ApiKey model."""

    list_display = [
        "name",
        "key_prefix_display",
        "scope",
        "is_valid_display",
        "expires_at",
        "last_used_at",
        "created_at",
    ]
    list_filter = ["scope", "expires_at", "created_at"]
    search_fields = ["name", "key_prefix"]
    readonly_fields = [
        "id",
        "key_prefix",
        "key_hash",
        "created_at",
        "last_used_at",
        "is_valid_display",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "scope"),
            },
        ),
        (
            "Key Information",
            {
                "fields": ("key_prefix", "key_hash"),
                "description": "The raw key is only shown once, right after creation.",
            },
        ),
        (
            "Validity",
            {
                "fields": ("expires_at", "is_valid_display"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "last_used_at"),
                "classes": ("collapse",),
            },
        ),
    )

    @admin.display(description="Key Prefix")
    def key_prefix_display(self, obj):
        """Display key prefix with ellipsis."""
        return f"{obj.key_prefix}..."

    @admin.display(description="Status")
    def is_valid_display(self, obj):
        """Display validity status with color."""
        if not obj.pk:
            return "-"
        if obj.is_valid():
            return format_html('<span style="color: green;">{}</span>', "Valid")
        return format_html('<span style="color: red;">{}</span>', "Expired")

    def save_model(self, request, obj, form, change):
        """Save model and show raw key if new."""
        super().save_model(request, obj, form, change)
        if not change and hasattr(obj, "_raw_key"):
            self.message_user(
                request,
                f"API Key created! Raw key: {obj._raw_key} "  # pylint: disable=protected-access
                "(Save this - it won't be shown again)",
                level="WARNING",
            )

"""
Django admin configuration for brands app.
"""

from django.contrib import admin

from brands.infrastructure.models import Brand, BrandImage


class BrandImageInline(admin.TabularInline):
    """Inline listing of a brand's images."""

    model = BrandImage
    extra = 0
    fields = ["position", "type", "path", "created_at"]
    readonly_fields = ["created_at"]
    ordering = ["position"]


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    """Admin interface for Brand model."""

    list_display = ["name", "slug", "image_count", "created_at"]
    list_filter = ["created_at", "updated_at"]
    search_fields = ["name", "slug"]
    readonly_fields = ["id", "created_at", "updated_at"]
    inlines = [BrandImageInline]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "name", "slug"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    @admin.display(description="Images")
    def image_count(self, obj):
        """Display number of images for this brand."""
        return obj.images.count()

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).prefetch_related("images")

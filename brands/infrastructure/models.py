"""
Brand and BrandImage models.
"""

from django.core.validators import MinLengthValidator
from django.db import models

from core.domain.value_objects import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    SLUG_MAX_LENGTH,
    SLUG_MIN_LENGTH,
)


class Brand(models.Model):
    """
    Represents a catalog brand (e.g., Sylius, Symfony).
    Products may point at a brand; images belong to it.
    """

    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        validators=[MinLengthValidator(NAME_MIN_LENGTH)],
        help_text="Brand display name",
    )
    slug = models.SlugField(
        max_length=SLUG_MAX_LENGTH,
        unique=True,
        validators=[MinLengthValidator(SLUG_MIN_LENGTH)],
        help_text="Unique lookup key, usable in place of the id",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "brands"
        ordering = ["id"]

    def __str__(self):
        return self.name


class BrandImage(models.Model):
    """
    An image owned by a brand.

    Only the storage path is kept here; the content lives in
    the configured file storage.
    """

    brand = models.ForeignKey(Brand, on_delete=models.CASCADE, related_name="images")
    type = models.CharField(max_length=191, help_text="Image role, e.g. 'logo'")
    path = models.CharField(max_length=255, help_text="Path in file storage")
    position = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "brand_images"
        ordering = ["brand", "position", "id"]
        indexes = [
            models.Index(fields=["brand", "position"]),
        ]

    def __str__(self):
        return f"{self.brand.name} - {self.type} #{self.position}"

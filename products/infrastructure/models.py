"""
Product model.
"""
from django.core.validators import MinLengthValidator
from django.db import models


class Product(models.Model):
    """
    Represents a catalog product.

    A product may belong to a brand. Deleting the brand clears the
    reference and keeps the product.
    """

    brand = models.ForeignKey(
        "brands.Brand",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    name = models.CharField(max_length=255, help_text="Product display name")
    slug = models.CharField(
        max_length=191,
        unique=True,
        validators=[MinLengthValidator(2)],
        help_text="URL-safe identifier",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["brand"]),
        ]

    def save(self, *args, **kwargs):
        """Save product with validation."""
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self):
        if self.brand_id:
            return f"{self.brand.name} - {self.name}"
        return self.name

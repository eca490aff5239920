"""
Django management command to load the demo brand catalog.

Creates:
- The Sylius, Symfony and Setono brands, each with one product
- Optionally, N generated brands (``--many N``) for pagination demos

Existing slugs are skipped, so the command can be run repeatedly.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from brands.domain.brand import Brand
from brands.infrastructure.repositories.django_brand_repository import DjangoBrandRepository
from products.infrastructure.models import Product

logger = logging.getLogger(__name__)

DEMO_BRANDS = [
    ("Sylius", "sylius", ("Sylius Plus", "sylius-plus")),
    ("Symfony", "symfony", ("Symfony Cloud", "symfony-cloud")),
    ("Setono", "setono", ("Setono Analytics", "setono-analytics")),
]


class Command(BaseCommand):
    """Command to seed demo brands."""

    help = "Load demo brands (Sylius, Symfony, Setono) and optional generated brands"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--many",
            type=int,
            default=0,
            help="Also create this many generated brands (brand-1, brand-2, ...)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        repo = DjangoBrandRepository()
        created = 0

        for name, slug, (product_name, product_slug) in DEMO_BRANDS:
            brand = self.ensure_brand(repo, name, slug)
            if brand:
                created += 1
            # pylint: disable=no-member
            owner_id = brand.id if brand else async_to_sync(repo.find_by_slug)(slug).id
            Product.objects.get_or_create(
                slug=product_slug, defaults={"name": product_name, "brand_id": owner_id}
            )

        for index in range(1, options["many"] + 1):
            if self.ensure_brand(repo, f"Brand {index}", f"brand-{index}"):
                created += 1

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Seeded {created} brand(s)"))

    def ensure_brand(self, repo: DjangoBrandRepository, name: str, slug: str):
        """Create a brand unless its slug exists; return it when created."""
        if async_to_sync(repo.slug_exists)(slug):
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING(f"Brand '{slug}' already exists"))
            return None

        brand = async_to_sync(repo.save)(Brand.create(name=name, slug=slug))
        logger.info("Seeded brand %s (id=%s)", brand.slug, brand.id)
        return brand

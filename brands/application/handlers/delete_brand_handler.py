"""
DeleteBrandHandler.
"""
import logging

from brands.application.commands.delete_brand import DeleteBrandCommand
from brands.application.services.brand_cache_service import BrandCacheService
from brands.domain.events import BrandDeleted
from brands.domain.services import BrandLocator
from brands.ports.brand_repository import BrandRepository
from brands.ports.image_storage import ImageStorage
from core.domain.exceptions import BrandNotFoundError
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class DeleteBrandHandler:
    """Handler for DeleteBrandCommand."""

    def __init__(self, brand_repository: BrandRepository, image_storage: ImageStorage):
        """Initialize handler with repository and image storage."""
        self.brand_repository = brand_repository
        self.image_storage = image_storage
        self.locator = BrandLocator(brand_repository)

    async def handle(self, command: DeleteBrandCommand) -> None:
        """
        Handle delete brand command.

        Stored image files are removed after the rows are gone.

        Args:
            command: DeleteBrandCommand

        Raises:
            BrandNotFoundError: If the identifier does not resolve
        """
        brand = await self.locator.resolve(command.identifier)
        if not brand:
            raise BrandNotFoundError(f"Brand '{command.identifier}' not found")

        await self.brand_repository.delete(brand)
        for image in brand.images:
            await self.image_storage.delete(image.path)

        await BrandCacheService.invalidate([brand.slug.value])

        logger.info("Deleted brand %s (id=%s)", brand.slug, brand.id)

        await event_bus.publish(
            BrandDeleted(
                aggregate_id=str(brand.id),
                slug=brand.slug.value,
                image_count=len(brand.images),
            )
        )

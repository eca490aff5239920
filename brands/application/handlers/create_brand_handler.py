"""
CreateBrandHandler.

Creates a brand together with its images.
"""
import logging
from typing import List

from brands.application.commands.create_brand import CreateBrandCommand
from brands.application.dto.brand_dto import BrandDTO
from brands.domain.brand import Brand
from brands.domain.events import BrandCreated
from brands.domain.image import BrandImage
from brands.domain.services import BrandValidator
from brands.ports.brand_repository import BrandRepository
from brands.ports.image_storage import ImageStorage
from core.domain.exceptions import DuplicateSlugError, ValidationFailedError
from core.infrastructure.events import event_bus
from core.metrics import brand_images_stored_total

logger = logging.getLogger(__name__)


class CreateBrandHandler:
    """Handler for CreateBrandCommand."""

    def __init__(self, brand_repository: BrandRepository, image_storage: ImageStorage):
        """Initialize handler with repository and image storage."""
        self.brand_repository = brand_repository
        self.image_storage = image_storage

    async def handle(self, command: CreateBrandCommand) -> BrandDTO:
        """
        Handle create brand command.

        Image content is written to storage first; if the brand cannot
        be saved, the stored files are removed again.

        Args:
            command: CreateBrandCommand

        Returns:
            BrandDTO of the created brand

        Raises:
            ValidationFailedError: If name, slug or an image type is invalid
            DuplicateSlugError: If the slug is taken
        """
        violations = BrandValidator.collect(command.name, command.slug)
        for index, upload in enumerate(command.images):
            violation = BrandValidator.validate_image_type(index, upload.type)
            if violation:
                violations.append(violation)
        if violations:
            raise ValidationFailedError(violations)

        slug = command.slug.strip()
        if await self.brand_repository.slug_exists(slug):
            raise DuplicateSlugError(slug)

        stored: List[BrandImage] = []
        try:
            for position, upload in enumerate(command.images):
                path = await self.image_storage.store(upload.content, upload.filename)
                stored.append(BrandImage.create(upload.type, path, position))
                brand_images_stored_total.labels(type=upload.type.strip()).inc()

            brand = Brand.create(name=command.name, slug=slug, images=stored)
            saved = await self.brand_repository.save(brand)
        except Exception:
            for image in stored:
                await self.image_storage.delete(image.path)
            raise

        logger.info("Created brand %s (id=%s, images=%d)", saved.slug, saved.id, len(saved.images))

        await event_bus.publish(
            BrandCreated(
                aggregate_id=str(saved.id),
                name=saved.name,
                slug=saved.slug.value,
                image_count=len(saved.images),
            )
        )

        return BrandDTO.from_entity(saved)

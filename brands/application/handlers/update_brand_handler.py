"""
UpdateBrandHandler.

Partial updates merge the supplied fields; full updates replace
name and slug and require both.
"""
import logging

from brands.application.commands.update_brand import UpdateBrandCommand
from brands.application.dto.brand_dto import BrandDTO
from brands.application.services.brand_cache_service import BrandCacheService
from brands.domain.events import BrandUpdated
from brands.domain.services import BrandLocator, BrandValidator
from brands.ports.brand_repository import BrandRepository
from core.domain.exceptions import (
    BrandNotFoundError,
    DuplicateSlugError,
    ValidationFailedError,
)
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class UpdateBrandHandler:
    """Handler for UpdateBrandCommand."""

    def __init__(self, brand_repository: BrandRepository):
        """Initialize handler with repository."""
        self.brand_repository = brand_repository
        self.locator = BrandLocator(brand_repository)

    async def handle(self, command: UpdateBrandCommand) -> BrandDTO:
        """
        Handle update brand command.

        Args:
            command: UpdateBrandCommand

        Returns:
            BrandDTO of the updated brand

        Raises:
            BrandNotFoundError: If the identifier does not resolve
            ValidationFailedError: If a supplied or required field is invalid
            DuplicateSlugError: If the new slug is taken
        """
        brand = await self.locator.resolve(command.identifier)
        if not brand:
            raise BrandNotFoundError(f"Brand '{command.identifier}' not found")

        if command.violations:
            raise ValidationFailedError(command.violations)

        required = not command.partial
        BrandValidator.ensure_valid(
            command.name,
            command.slug,
            require_name=required,
            require_slug=required,
        )

        if command.slug is not None:
            new_slug = command.slug.strip()
            if new_slug != brand.slug.value and await self.brand_repository.slug_exists(
                new_slug, exclude_id=brand.id
            ):
                raise DuplicateSlugError(new_slug)

        updated = brand.update(name=command.name, slug=command.slug)
        saved = await self.brand_repository.save(updated) if updated is not brand else brand

        await BrandCacheService.invalidate([brand.slug.value, saved.slug.value])

        logger.info(
            "Updated brand %s (id=%s, partial=%s)", saved.slug, saved.id, command.partial
        )

        await event_bus.publish(
            BrandUpdated(
                aggregate_id=str(saved.id),
                name=saved.name,
                slug=saved.slug.value,
                partial=command.partial,
                previous_slug=brand.slug.value,
            )
        )

        return BrandDTO.from_entity(saved)

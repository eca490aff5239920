"""
GetBrandHandler.
"""
from brands.application.dto.brand_dto import BrandDTO
from brands.application.queries.get_brand import GetBrandQuery
from brands.application.services.brand_cache_service import BrandCacheService
from brands.domain.services import BrandLocator
from brands.ports.brand_repository import BrandRepository
from core.domain.exceptions import BrandNotFoundError


class GetBrandHandler:
    """Handler for GetBrandQuery."""

    def __init__(self, brand_repository: BrandRepository):
        """Initialize handler with repository."""
        self.locator = BrandLocator(brand_repository)

    async def handle(self, query: GetBrandQuery) -> BrandDTO:
        """
        Handle get brand query.

        Args:
            query: GetBrandQuery

        Returns:
            BrandDTO

        Raises:
            BrandNotFoundError: If the identifier does not resolve
        """
        cached = await BrandCacheService.get_brand(query.identifier)
        if cached:
            return cached

        brand = await self.locator.resolve(query.identifier)
        if not brand:
            raise BrandNotFoundError(f"Brand '{query.identifier}' not found")

        result = BrandDTO.from_entity(brand)
        await BrandCacheService.set_brand(result)
        return result

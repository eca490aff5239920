"""
ListBrandsHandler.
"""
from brands.application.dto.brand_dto import BrandPageDTO, BrandSummaryDTO
from brands.application.queries.list_brands import ListBrandsQuery
from brands.ports.brand_repository import BrandRepository


class ListBrandsHandler:
    """Handler for ListBrandsQuery."""

    def __init__(self, brand_repository: BrandRepository):
        """Initialize handler with repository."""
        self.brand_repository = brand_repository

    async def handle(self, query: ListBrandsQuery) -> BrandPageDTO:
        """
        Handle list brands query.

        Args:
            query: ListBrandsQuery

        Returns:
            BrandPageDTO with the requested page
        """
        brands, total = await self.brand_repository.list_page(
            criteria=query.criteria,
            sorting=query.sorting,
            page=query.page,
            limit=query.limit,
        )
        return BrandPageDTO(
            items=[BrandSummaryDTO.from_entity(brand) for brand in brands],
            page=query.page,
            limit=query.limit,
            total=total,
        )

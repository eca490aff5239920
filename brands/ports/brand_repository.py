"""
Brand repository port (interface).

This defines the contract for brand persistence operations.
Implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from brands.domain.brand import Brand
from core.domain.value_objects import Criterion, SortOrder


class BrandRepository(ABC):
    """
    Abstract repository for Brand entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    A brand is always loaded and stored together with its images.
    """

    @abstractmethod
    async def save(self, brand: Brand) -> Brand:
        """
        Save a brand entity and its images in one transaction.

        New images (id None) are inserted; persisted images the entity
        no longer carries are removed.

        Args:
            brand: Brand entity to save

        Returns:
            Saved brand entity, with ids assigned

        Raises:
            DuplicateSlugError: If another brand holds the slug
        """
        pass

    @abstractmethod
    async def find_by_id(self, brand_id: int) -> Optional[Brand]:
        """
        Find a brand by ID.

        Returns:
            Brand entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Brand]:
        """
        Find a brand by slug.

        Returns:
            Brand entity or None if not found
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        """
        Check whether a slug is taken.

        Args:
            slug: Slug to check
            exclude_id: Brand whose own slug should not count

        Returns:
            True if another brand uses the slug
        """
        pass

    @abstractmethod
    async def delete(self, brand: Brand) -> None:
        """
        Delete a brand and its image rows.

        Related products are kept.
        """
        pass

    @abstractmethod
    async def list_page(
        self,
        criteria: Sequence[Criterion],
        sorting: Sequence[SortOrder],
        page: int,
        limit: int,
    ) -> Tuple[List[Brand], int]:
        """
        List one page of brands.

        Args:
            criteria: Filter predicates, all of which must hold
            sorting: Sort keys in priority order
            page: 1-based page number
            limit: Page size

        Returns:
            The brands on the page and the total number of matches
        """
        pass


# Criterion fields and the brand attributes each one matches against.
FILTERABLE_FIELDS = {
    "search": ("name", "slug"),
    "name": ("name",),
    "slug": ("slug",),
}

SORTABLE_FIELDS = ("id", "name", "slug", "created_at")

"""
Brand DTOs for API responses.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import List

from brands.domain.brand import Brand


@dataclass
class BrandImageDTO:
    """DTO for brand image information."""

    id: int
    type: str
    path: str


@dataclass
class BrandDTO:
    """DTO for the full brand representation (products excluded)."""

    id: int
    name: str
    slug: str
    images: List[BrandImageDTO]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, brand: Brand) -> "BrandDTO":
        return cls(
            id=brand.id,
            name=brand.name,
            slug=brand.slug.value,
            images=[
                BrandImageDTO(id=image.id, type=image.type, path=image.path)
                for image in brand.images
            ],
            created_at=brand.created_at,
            updated_at=brand.updated_at,
        )


@dataclass
class BrandSummaryDTO:
    """DTO for a brand list item."""

    id: int
    name: str
    slug: str

    @classmethod
    def from_entity(cls, brand: Brand) -> "BrandSummaryDTO":
        return cls(id=brand.id, name=brand.name, slug=brand.slug.value)


@dataclass
class BrandPageDTO:
    """DTO for one page of the brand list."""

    items: List[BrandSummaryDTO]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        """Number of pages; an empty result still has one page."""
        return max(1, math.ceil(self.total / self.limit))

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

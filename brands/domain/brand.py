"""
Brand domain entity.

This is the core domain entity of the catalog.
It contains business logic and is independent of infrastructure.
"""

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence, Tuple

from brands.domain.image import BrandImage
from core.domain.value_objects import NAME_MAX_LENGTH, NAME_MIN_LENGTH, BrandSlug


@dataclass(frozen=True)
class Brand:
    """
    Brand domain entity.

    Represents a named catalog brand with a unique slug and
    an ordered list of images. The id is None until the brand
    has been persisted.
    """

    id: Optional[int]
    name: str
    slug: BrandSlug
    images: Tuple[BrandImage, ...]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate brand entity."""
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Brand name cannot be empty")
        if len(self.name) < NAME_MIN_LENGTH or len(self.name) > NAME_MAX_LENGTH:
            raise ValueError(
                f"Brand name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
            )
        positions = [image.position for image in self.images]
        if positions != sorted(positions):
            raise ValueError("Brand images must be ordered by position")

    @classmethod
    def create(
        cls,
        name: str,
        slug: str,
        images: Sequence[BrandImage] = (),
    ) -> "Brand":
        """
        Create a new Brand entity.

        Args:
            name: Brand display name
            slug: Brand slug (unique lookup key)
            images: Images in submission order

        Returns:
            Brand entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=None,
            name=name.strip(),
            slug=BrandSlug(slug.strip()),
            images=tuple(images),
            created_at=now,
            updated_at=now,
        )

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def update(self, name: Optional[str] = None, slug: Optional[str] = None) -> "Brand":
        """
        Create a new Brand instance with the given fields changed.

        Fields passed as None keep their current value.

        Args:
            name: New brand name
            slug: New brand slug

        Returns:
            New Brand instance
        """
        changes = {}
        if name is not None:
            changes["name"] = name.strip()
        if slug is not None:
            changes["slug"] = BrandSlug(slug.strip())
        if not changes:
            return self
        return dataclasses.replace(self, updated_at=datetime.now(timezone.utc), **changes)

"""
BrandImage domain entity.

An image owned by a brand: a type tag plus the storage path of
its binary content. Position keeps the order images were submitted in.
"""
from dataclasses import dataclass
from typing import Optional

IMAGE_TYPE_MAX_LENGTH = 191


@dataclass(frozen=True)
class BrandImage:
    """Image attached to a brand."""

    id: Optional[int]
    type: str
    path: str
    position: int

    def __post_init__(self):
        """Validate image entity."""
        if not self.type or len(self.type.strip()) == 0:
            raise ValueError("Image type cannot be empty")
        if len(self.type) > IMAGE_TYPE_MAX_LENGTH:
            raise ValueError("Image type too long")
        if not self.path:
            raise ValueError("Image path cannot be empty")
        if self.position < 0:
            raise ValueError("Image position cannot be negative")

    @classmethod
    def create(cls, image_type: str, path: str, position: int) -> "BrandImage":
        """Create a not-yet-persisted image."""
        return cls(id=None, type=image_type.strip(), path=path, position=position)

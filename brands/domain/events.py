"""
Brand domain events.

Domain events represent something that happened in the brand domain.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class BrandCreated(DomainEvent):
    """Event raised when a brand is created."""

    name: str
    slug: str
    image_count: int = 0


@dataclass(frozen=True)
class BrandUpdated(DomainEvent):
    """Event raised when a brand is updated, partially or in full."""

    name: str
    slug: str
    partial: bool
    previous_slug: Optional[str] = None

    @property
    def slug_changed(self) -> bool:
        return self.previous_slug is not None and self.previous_slug != self.slug


@dataclass(frozen=True)
class BrandDeleted(DomainEvent):
    """Event raised when a brand and its images are removed."""

    slug: str
    image_count: int = 0

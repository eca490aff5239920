"""
Brand cache service.

Caches the show representation of a brand under its slug.
Numeric-id lookups always go to the repository, since an
identifier like "12" may also be another brand's slug.
"""
import dataclasses
import logging
from typing import Iterable, Optional

from django.conf import settings

from brands.application.dto.brand_dto import BrandDTO, BrandImageDTO
from core.infrastructure.cache_adapters import cache_adapter

logger = logging.getLogger(__name__)

CACHE_TTL_BRAND_SHOW = 300  # 5 minutes


class BrandCacheService:
    """Service for caching brand representations."""

    @staticmethod
    def _brand_key(slug: str) -> str:
        return f"brand:show:{slug}"

    @staticmethod
    async def get_brand(slug: str) -> Optional[BrandDTO]:
        """
        Get a cached brand.

        Args:
            slug: Brand slug

        Returns:
            Cached BrandDTO or None
        """
        cached = await cache_adapter.get(BrandCacheService._brand_key(slug))
        if cached is None:
            return None
        try:
            images = [BrandImageDTO(**image) for image in cached.pop("images")]
            return BrandDTO(images=images, **cached)
        except (KeyError, TypeError) as e:
            logger.warning("Error deserializing cached brand %s: %s", slug, e)
            return None

    @staticmethod
    async def set_brand(brand: BrandDTO, ttl: int = None) -> None:
        """
        Cache a brand representation.

        Args:
            brand: BrandDTO to cache
            ttl: Time to live in seconds
        """
        ttl = ttl or getattr(settings, "BRANDS_CACHE_TTL", CACHE_TTL_BRAND_SHOW)
        await cache_adapter.set(
            BrandCacheService._brand_key(brand.slug), dataclasses.asdict(brand), timeout=ttl
        )

    @staticmethod
    async def invalidate(slugs: Iterable[str]) -> None:
        """
        Invalidate cached representations.

        Args:
            slugs: Every slug the brand was or is reachable by
        """
        keys = [BrandCacheService._brand_key(slug) for slug in set(slugs) if slug]
        if keys:
            await cache_adapter.delete_many(keys)

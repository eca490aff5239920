"""
Cache adapter implementations.

Provides the Django cache implementation of CachePort.
"""

import logging
from typing import Any, Iterable, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)


def _metric_label(key: str) -> str:
    """Collapse a concrete key to its namespace for metric labels."""
    return key.rsplit(":", 1)[0]


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Backend errors are logged and reported as misses so that a cache
    outage degrades to direct reads instead of failing requests.
    """

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await sync_to_async(cache.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None

        if value is not None:
            cache_hits_total.labels(cache_key=_metric_label(key)).inc()
            logger.debug("Cache hit: %s", key)
        else:
            cache_misses_total.labels(cache_key=_metric_label(key)).inc()
            logger.debug("Cache miss: %s", key)
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            await sync_to_async(cache.set)(key, value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    async def delete_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        try:
            await sync_to_async(cache.delete_many)(keys)
            logger.debug("Cache delete: %s", ", ".join(keys))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from cache: %s", e, exc_info=True)


# Global cache instance
cache_adapter = DjangoCacheAdapter()

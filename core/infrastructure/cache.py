"""
Cache abstraction (port).

Application services talk to this interface; the backend
(Redis in deployed settings, local memory in tests) is chosen
by Django's CACHES setting behind the adapter.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional


class CachePort(ABC):
    """Abstract cache port."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Returns:
            Cached value or None on a miss
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """Store a value, expiring after ``timeout`` seconds."""
        pass

    @abstractmethod
    async def delete_many(self, keys: Iterable[str]) -> None:
        """Remove every given key; absent keys are ignored."""
        pass

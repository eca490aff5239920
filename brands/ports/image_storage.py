"""
Image storage port (interface).

Binary image content lives outside the database; brands
only keep the path returned by the storage.
"""
from abc import ABC, abstractmethod
from typing import BinaryIO


class ImageStorage(ABC):
    """Abstract storage for brand image content."""

    @abstractmethod
    async def store(self, content: BinaryIO, filename: str) -> str:
        """
        Store image content.

        Args:
            content: Readable binary file object
            filename: Client-supplied file name, used as a hint only

        Returns:
            Path under which the content was stored
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete stored content; a missing path is ignored."""
        pass

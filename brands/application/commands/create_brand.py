"""
CreateBrandCommand.

Command to create a brand, optionally with images.
"""
from dataclasses import dataclass, field
from typing import BinaryIO, List


@dataclass
class ImageUpload:
    """An image descriptor paired with its uploaded content."""

    type: str
    content: BinaryIO
    filename: str


@dataclass
class CreateBrandCommand:
    """Command to create a brand; images keep the order given."""

    name: str
    slug: str
    images: List[ImageUpload] = field(default_factory=list)

"""
Django storage implementation of the ImageStorage port.

Content goes through Django's default storage, so the backend
(local filesystem, S3, ...) is chosen by the STORAGES setting.
"""

import logging
import os
import re
import uuid
from typing import BinaryIO

from asgiref.sync import sync_to_async
from django.conf import settings
from django.core.files import File
from django.core.files.storage import default_storage

from brands.ports.image_storage import ImageStorage

logger = logging.getLogger(__name__)


class DjangoImageStorage(ImageStorage):
    """Stores brand images under BRANDS_IMAGE_UPLOAD_DIR."""

    def _target_name(self, filename: str) -> str:
        base, ext = os.path.splitext(os.path.basename(filename or ""))
        base = re.sub(r"[^\w.-]", "", base.replace(" ", "_")).strip("._") or "image"
        ext = re.sub(r"[^\w.]", "", ext).lower()
        upload_dir = getattr(settings, "BRANDS_IMAGE_UPLOAD_DIR", "brands/images")
        return f"{upload_dir}/{uuid.uuid4().hex[:12]}-{base}{ext}"

    @sync_to_async
    def store(self, content: BinaryIO, filename: str) -> str:
        """
        Store image content.

        Args:
            content: Readable binary file object
            filename: Client-supplied file name

        Returns:
            Storage path of the saved file
        """
        if hasattr(content, "seek"):
            content.seek(0)
        path = default_storage.save(self._target_name(filename), File(content))
        logger.debug("Stored brand image at %s", path)
        return path

    @sync_to_async
    def delete(self, path: str) -> None:
        """
        Delete stored image content.

        Args:
            path: Storage path returned by store()
        """
        if path and default_storage.exists(path):
            default_storage.delete(path)
            logger.debug("Deleted brand image %s", path)

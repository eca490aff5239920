"""
Pytest configuration and shared fixtures.
"""

import base64
import dataclasses
from datetime import timedelta

import pytest
from asgiref.sync import async_to_sync
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from brands.domain.brand import Brand
from brands.domain.events import BrandCreated, BrandDeleted, BrandUpdated
from brands.domain.image import BrandImage
from brands.infrastructure.models import Brand as BrandModel
from brands.infrastructure.repositories.django_brand_repository import DjangoBrandRepository
from brands.ports.brand_repository import BrandRepository
from brands.ports.image_storage import ImageStorage
from core.domain.events import EventHandler
from core.domain.exceptions import BrandNotFoundError
from core.infrastructure.events import event_bus
from core.infrastructure.models import SCOPE_FULL, SCOPE_READ, ApiKey
from products.infrastructure.models import Product

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Store uploaded images in a per-test directory."""
    settings.MEDIA_ROOT = str(tmp_path / "media")
    return tmp_path / "media"


@pytest.fixture(autouse=True)
def clear_cache():
    """Start and end every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def brand_repository():
    """Fixture for BrandRepository."""
    return DjangoBrandRepository()


@pytest.fixture
def sample_brand():
    """Fixture for an unsaved Brand entity with two images."""
    return Brand.create(
        name="Sylius",
        slug="sylius",
        images=[
            BrandImage.create("logo", "brands/images/sylius-logo.png", 0),
            BrandImage.create("banner", "brands/images/sylius-banner.png", 1),
        ],
    )


@pytest.fixture
def db_brand(db, brand_repository, sample_brand):
    """Fixture for a Brand saved in database."""
    return async_to_sync(brand_repository.save)(sample_brand)


@pytest.fixture
def full_api_key(db):
    """Raw value of an API key with full access."""
    _, raw_key = ApiKey.issue(name="api administrator", scope=SCOPE_FULL)
    return raw_key


@pytest.fixture
def read_api_key(db):
    """Raw value of a read-only API key."""
    _, raw_key = ApiKey.issue(name="catalog reader", scope=SCOPE_READ)
    return raw_key


@pytest.fixture
def expired_api_key(db):
    """Raw value of an API key that expired yesterday."""
    _, raw_key = ApiKey.issue(
        name="former administrator",
        expires_at=timezone.now() - timedelta(days=1),
    )
    return raw_key


@pytest.fixture
def auth_headers(full_api_key):
    """Request headers carrying the full-access key as a bearer token."""
    return {"HTTP_AUTHORIZATION": f"Bearer {full_api_key}"}


@pytest.fixture
def demo_brands(db):
    """
    The Sylius, Symfony and Setono brands, created in that order.

    Sylius owns one product.
    """
    # pylint: disable=no-member
    brands = {
        slug: BrandModel.objects.create(name=name, slug=slug)
        for name, slug in (("Sylius", "sylius"), ("Symfony", "symfony"), ("Setono", "setono"))
    }
    Product.objects.create(name="Sylius Plus", slug="sylius-plus", brand=brands["sylius"])
    return brands


@pytest.fixture
def many_brands(db):
    """Ten generated brands, brand-01 to brand-10."""
    # pylint: disable=no-member
    return [
        BrandModel.objects.create(name=f"Brand {index:02d}", slug=f"brand-{index:02d}")
        for index in range(1, 11)
    ]


@pytest.fixture
def png_upload():
    """Factory for in-memory PNG uploads."""

    def make(name="logo.png"):
        return SimpleUploadedFile(name, PNG_BYTES, content_type="image/png")

    return make


class InMemoryBrandRepository(BrandRepository):
    """BrandRepository keeping brands in a dict, for handler tests."""

    def __init__(self):
        self.brands = {}
        self.save_calls = 0
        self.fail_on_save = False
        self._next_id = 1

    def _assign_id(self):
        self._next_id += 1
        return self._next_id - 1

    async def save(self, brand):
        self.save_calls += 1
        if self.fail_on_save:
            raise RuntimeError("store unavailable")
        images = tuple(
            image if image.id is not None else dataclasses.replace(image, id=self._assign_id())
            for image in brand.images
        )
        brand_id = brand.id if brand.id is not None else self._assign_id()
        saved = dataclasses.replace(brand, id=brand_id, images=images)
        self.brands[brand_id] = saved
        return saved

    async def find_by_id(self, brand_id):
        return self.brands.get(brand_id)

    async def find_by_slug(self, slug):
        return next((b for b in self.brands.values() if b.slug.value == slug), None)

    async def slug_exists(self, slug, exclude_id=None):
        return any(
            b.slug.value == slug and b.id != exclude_id for b in self.brands.values()
        )

    async def delete(self, brand):
        if self.brands.pop(brand.id, None) is None:
            raise BrandNotFoundError()

    async def list_page(self, criteria, sorting, page, limit):
        brands = sorted(self.brands.values(), key=lambda b: b.id)
        offset = (page - 1) * limit
        return brands[offset:offset + limit], len(brands)


class InMemoryImageStorage(ImageStorage):
    """ImageStorage keeping file contents in a dict."""

    def __init__(self):
        self.files = {}

    async def store(self, content, filename):
        path = f"brands/images/{len(self.files)}-{filename}"
        self.files[path] = content.read()
        return path

    async def delete(self, path):
        self.files.pop(path, None)


@pytest.fixture
def memory_brand_repository():
    """Fixture for an in-memory BrandRepository."""
    return InMemoryBrandRepository()


@pytest.fixture
def memory_image_storage():
    """Fixture for an in-memory ImageStorage."""
    return InMemoryImageStorage()


@pytest.fixture
def published_events(monkeypatch):
    """Collect events published on the global event bus during a test."""
    events = []

    class RecordingHandler(EventHandler):
        async def handle(self, event):
            events.append(event)

    monkeypatch.setattr(event_bus, "_handlers", {})
    for event_type in (BrandCreated, BrandUpdated, BrandDeleted):
        event_bus.subscribe(event_type, RecordingHandler())
    return events

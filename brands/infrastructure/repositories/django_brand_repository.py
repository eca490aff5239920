"""
Django implementation of BrandRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet

from brands.domain.brand import Brand
from brands.domain.image import BrandImage
from brands.infrastructure.models import Brand as BrandModel
from brands.infrastructure.models import BrandImage as BrandImageModel
from brands.ports.brand_repository import FILTERABLE_FIELDS, SORTABLE_FIELDS, BrandRepository
from core.domain.exceptions import BrandNotFoundError, DuplicateSlugError
from core.domain.value_objects import BrandSlug, Criterion, FilterType, SortOrder

logger = logging.getLogger(__name__)

# ORM lookup for each non-negated filter type
_LOOKUPS = {
    FilterType.CONTAINS: "icontains",
    FilterType.EQUAL: "iexact",
    FilterType.STARTS_WITH: "istartswith",
    FilterType.ENDS_WITH: "iendswith",
    FilterType.EMPTY: "exact",
}


class DjangoBrandRepository(BrandRepository):
    """
    Django ORM implementation of BrandRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Writes a brand and its images inside one transaction
    3. Translates slug conflicts into DuplicateSlugError
    """

    def _to_domain(self, model: BrandModel) -> Brand:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Brand model, images prefetched

        Returns:
            Brand domain entity
        """
        images = tuple(
            BrandImage(id=image.id, type=image.type, path=image.path, position=image.position)
            for image in sorted(model.images.all(), key=lambda image: (image.position, image.id))
        )
        return Brand(
            id=model.id,
            name=model.name,
            slug=BrandSlug(model.slug),
            images=images,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _queryset(self) -> QuerySet:
        # pylint: disable=no-member
        return BrandModel.objects.prefetch_related("images")

    def _get(self, **lookup) -> Optional[Brand]:
        try:
            return self._to_domain(self._queryset().get(**lookup))
        except BrandModel.DoesNotExist:  # pylint: disable=no-member
            return None

    def _write(self, brand: Brand) -> int:
        """Write brand and images; must run inside a transaction."""
        if brand.id is None:
            model = BrandModel(name=brand.name, slug=str(brand.slug))
        else:
            try:
                # pylint: disable=no-member
                model = BrandModel.objects.select_for_update().get(id=brand.id)
            except BrandModel.DoesNotExist as e:  # pylint: disable=no-member
                raise BrandNotFoundError(f"Brand {brand.id} not found") from e
            model.name = brand.name
            model.slug = str(brand.slug)
        model.save()

        kept_ids = [image.id for image in brand.images if image.id is not None]
        model.images.exclude(id__in=kept_ids).delete()
        for image in brand.images:
            if image.id is None:
                # pylint: disable=no-member
                BrandImageModel.objects.create(
                    brand=model,
                    type=image.type,
                    path=image.path,
                    position=image.position,
                )
            else:
                model.images.filter(id=image.id).update(type=image.type, position=image.position)
        return model.id

    @sync_to_async
    def save(self, brand: Brand) -> Brand:
        """
        Save a brand entity.

        Args:
            brand: Brand entity to save

        Returns:
            Saved brand entity
        """
        try:
            with transaction.atomic():
                brand_id = self._write(brand)
        except IntegrityError as e:
            # pylint: disable=no-member
            taken = BrandModel.objects.filter(slug=str(brand.slug))
            if brand.id is not None:
                taken = taken.exclude(id=brand.id)
            if taken.exists():
                logger.info("Slug conflict on save: %s", brand.slug)
                raise DuplicateSlugError(str(brand.slug)) from e
            raise
        return self._get(id=brand_id)

    @sync_to_async
    def find_by_id(self, brand_id: int) -> Optional[Brand]:
        """
        Find a brand by ID.

        Args:
            brand_id: Brand primary key

        Returns:
            Brand entity or None if not found
        """
        return self._get(id=brand_id)

    @sync_to_async
    def find_by_slug(self, slug: str) -> Optional[Brand]:
        """
        Find a brand by slug.

        Args:
            slug: Brand slug

        Returns:
            Brand entity or None if not found
        """
        return self._get(slug=slug)

    @sync_to_async
    def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        # pylint: disable=no-member
        qs = BrandModel.objects.filter(slug=slug)
        if exclude_id is not None:
            qs = qs.exclude(id=exclude_id)
        return qs.exists()

    @sync_to_async
    def delete(self, brand: Brand) -> None:
        """
        Delete a brand; image rows cascade, products are detached.

        Args:
            brand: Brand entity to delete
        """
        with transaction.atomic():
            # pylint: disable=no-member
            deleted, _ = BrandModel.objects.filter(id=brand.id).delete()
        if not deleted:
            raise BrandNotFoundError(f"Brand {brand.id} not found")

    @staticmethod
    def _criterion_q(criterion: Criterion) -> Q:
        """Build the filter for one criterion over its mapped columns."""
        lookup = _LOOKUPS[criterion.type.positive]
        value = "" if criterion.type.positive is FilterType.EMPTY else criterion.value
        q = Q()
        for column in FILTERABLE_FIELDS[criterion.field]:
            q |= Q(**{f"{column}__{lookup}": value})
        return ~q if criterion.type.is_negated else q

    @sync_to_async
    def list_page(
        self,
        criteria: Sequence[Criterion],
        sorting: Sequence[SortOrder],
        page: int,
        limit: int,
    ) -> Tuple[List[Brand], int]:
        """
        List one page of brands.

        Returns:
            Brands on the page and total number of matches
        """
        qs = self._queryset()
        for criterion in criteria:
            if criterion.field not in FILTERABLE_FIELDS:
                raise ValueError(f"Unsupported criterion field: {criterion.field}")
            qs = qs.filter(self._criterion_q(criterion))

        ordering = []
        for order in sorting:
            if order.field not in SORTABLE_FIELDS:
                raise ValueError(f"Unsupported sort field: {order.field}")
            ordering.append(f"-{order.field}" if order.descending else order.field)
        if "id" not in ordering and "-id" not in ordering:
            ordering.append("id")
        qs = qs.order_by(*ordering)

        total = qs.count()
        offset = (page - 1) * limit
        models = list(qs[offset:offset + limit])
        return [self._to_domain(model) for model in models], total

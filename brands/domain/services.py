"""
Brand domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
from typing import List, Optional

from brands.domain.brand import Brand
from brands.domain.image import IMAGE_TYPE_MAX_LENGTH
from brands.ports.brand_repository import BrandRepository
from core.domain.exceptions import FieldViolation, ValidationFailedError
from core.domain.value_objects import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    SLUG_MAX_LENGTH,
    SLUG_MIN_LENGTH,
    SLUG_PATTERN,
)

logger = logging.getLogger(__name__)


class BrandValidator:
    """Domain service for brand validation."""

    @staticmethod
    def _check_text(
        field: str, value: Optional[str], min_length: int, max_length: int
    ) -> Optional[FieldViolation]:
        if value is None:
            return FieldViolation(field, "required", "This field is required.")
        value = value.strip()
        if not value:
            return FieldViolation(field, "blank", "This field may not be blank.")
        if len(value) < min_length:
            return FieldViolation(
                field,
                "min_length",
                f"Ensure this field has at least {min_length} characters.",
            )
        if len(value) > max_length:
            return FieldViolation(
                field,
                "max_length",
                f"Ensure this field has no more than {max_length} characters.",
            )
        return None

    @classmethod
    def validate_name(cls, name: Optional[str]) -> Optional[FieldViolation]:
        """
        Validate brand name.

        Args:
            name: Brand name to validate

        Returns:
            The violation, or None if valid
        """
        return cls._check_text("name", name, NAME_MIN_LENGTH, NAME_MAX_LENGTH)

    @classmethod
    def validate_slug(cls, slug: Optional[str]) -> Optional[FieldViolation]:
        """
        Validate brand slug.

        Args:
            slug: Brand slug to validate

        Returns:
            The violation, or None if valid
        """
        violation = cls._check_text("slug", slug, SLUG_MIN_LENGTH, SLUG_MAX_LENGTH)
        if violation is None and not SLUG_PATTERN.match(slug.strip()):
            return FieldViolation(
                "slug",
                "invalid",
                "Enter a valid slug consisting of letters, numbers, underscores or hyphens.",
            )
        return violation

    @classmethod
    def validate_image_type(cls, index: int, image_type: Optional[str]) -> Optional[FieldViolation]:
        return cls._check_text(f"images[{index}].type", image_type, 1, IMAGE_TYPE_MAX_LENGTH)

    @classmethod
    def collect(
        cls,
        name: Optional[str] = None,
        slug: Optional[str] = None,
        *,
        require_name: bool = True,
        require_slug: bool = True,
    ) -> List[FieldViolation]:
        """
        Validate name and slug together.

        A field that is not required is only checked when supplied.

        Returns:
            Every violation found, name first
        """
        violations = []
        if require_name or name is not None:
            violations.append(cls.validate_name(name))
        if require_slug or slug is not None:
            violations.append(cls.validate_slug(slug))
        return [violation for violation in violations if violation]

    @classmethod
    def ensure_valid(cls, *args, **kwargs) -> None:
        """
        Raise ValidationFailedError if ``collect`` finds violations.

        Raises:
            ValidationFailedError: If any field is invalid
        """
        violations = cls.collect(*args, **kwargs)
        if violations:
            raise ValidationFailedError(violations)


class BrandLocator:
    """Resolves the identifier used in brand routes."""

    def __init__(self, brand_repository: BrandRepository):
        self.brand_repository = brand_repository

    async def resolve(self, identifier: str) -> Optional[Brand]:
        """
        Resolve a slug or a numeric id to a brand.

        The slug is tried first; when no brand carries that slug and the
        identifier parses as an integer, it is looked up as an id.

        Args:
            identifier: Brand slug or id, as it appears in the URL

        Returns:
            Brand entity or None if not found
        """
        identifier = str(identifier).strip()
        if not identifier:
            return None

        brand = await self.brand_repository.find_by_slug(identifier)
        if brand:
            return brand

        try:
            brand_id = int(identifier)
        except ValueError:
            return None
        if brand_id < 1:
            logger.debug("Rejected non-positive brand id %s", brand_id)
            return None
        return await self.brand_repository.find_by_id(brand_id)

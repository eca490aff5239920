"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""

from dataclasses import dataclass
from typing import Iterable, List


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


@dataclass(frozen=True)
class FieldViolation:
    """A single failing field and the machine-readable reason it failed."""

    field: str
    code: str
    message: str

    def to_dict(self) -> dict:
        """Return violation as a JSON-ready dictionary."""
        return {"field": self.field, "code": self.code, "message": self.message}


class ValidationFailedError(DomainException):
    """Raised when one or more input fields violate a rule."""

    def __init__(
        self,
        violations: Iterable[FieldViolation],
        message: str = "Validation failed",
    ):
        super().__init__(message, code="VALIDATION_FAILED")
        self.violations: List[FieldViolation] = list(violations)

    @property
    def fields(self) -> List[str]:
        """Names of the offending fields, in reporting order."""
        return [violation.field for violation in self.violations]


class BrandException(DomainException):
    """Base exception for brand-related errors."""

    pass


class BrandNotFoundError(BrandException):
    """Raised when an identifier does not resolve to a brand."""

    def __init__(self, message: str = "Brand not found"):
        super().__init__(message, code="BRAND_NOT_FOUND")


class DuplicateSlugError(ValidationFailedError):
    """Raised when a slug is already taken by another brand."""

    def __init__(self, slug: str):
        super().__init__(
            [FieldViolation("slug", "unique", f"Slug '{slug}' is already used by another brand.")]
        )
        self.slug = slug


class InvalidAPIKeyError(DomainException):
    """Raised when an API key is missing, unknown or expired."""

    def __init__(self, message: str = "Invalid API key"):
        super().__init__(message, code="ACCESS_DENIED")


class InsufficientScopeError(DomainException):
    """Raised when an API key may not perform the requested operation."""

    def __init__(self, message: str = "API key scope does not allow this operation"):
        super().__init__(message, code="INSUFFICIENT_SCOPE")

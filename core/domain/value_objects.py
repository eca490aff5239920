"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import re
from abc import ABC
from dataclasses import dataclass
from enum import Enum

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 191
SLUG_MIN_LENGTH = 2
SLUG_MAX_LENGTH = 191

# Same alphabet as Django's validate_slug; a slug must fit one URL path segment.
SLUG_PATTERN = re.compile(r"^[-a-zA-Z0-9_]+\Z")


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted((k, str(v)) for k, v in self.__dict__.items())))


@dataclass(frozen=True, eq=False)
class BrandSlug(ValueObject):
    """Brand slug value object."""

    value: str

    def __post_init__(self):
        """Validate slug length and alphabet."""
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Brand slug cannot be empty")
        if len(self.value) < SLUG_MIN_LENGTH or len(self.value) > SLUG_MAX_LENGTH:
            raise ValueError(
                f"Brand slug must be between {SLUG_MIN_LENGTH} and {SLUG_MAX_LENGTH} characters"
            )
        if not SLUG_PATTERN.match(self.value):
            raise ValueError("Brand slug may only contain letters, numbers, underscores or hyphens")

    def __str__(self) -> str:
        """Return slug as string."""
        return self.value


class SortDirection(Enum):
    """Direction of a sort key."""

    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value


class FilterType(Enum):
    """Comparison applied by a list criterion."""

    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"

    def __str__(self) -> str:
        return self.value

    @property
    def is_negated(self) -> bool:
        """True for the not_* comparisons."""
        return self.value.startswith("not_")

    @property
    def positive(self) -> "FilterType":
        """The comparison this type negates (itself when not negated)."""
        if not self.is_negated:
            return self
        return FilterType(self.value[len("not_"):])

    @property
    def requires_value(self) -> bool:
        """Whether the criterion needs a value to compare against."""
        return self.positive is not FilterType.EMPTY


@dataclass(frozen=True, eq=False)
class SortOrder(ValueObject):
    """One sort key of a list query."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True, eq=False)
class Criterion(ValueObject):
    """One filter predicate of a list query."""

    field: str
    type: FilterType = FilterType.CONTAINS
    value: str = ""

    def __post_init__(self):
        """Validate that value-based comparisons carry a value."""
        if self.type.requires_value and not self.value:
            raise ValueError(f"Criterion '{self.field}' of type '{self.type}' requires a value")

"""
Query-string parsing for the brand list endpoint.

Accepted parameters::

    page=2&limit=3
    sorting[slug]=desc
    criteria[search][type]=contains&criteria[search][value]=sylius
    criteria[name]=sylius          (shorthand for contains)
"""

import re
from typing import Dict, List, Optional

from django.conf import settings

from brands.application.queries.list_brands import ListBrandsQuery
from brands.ports.brand_repository import FILTERABLE_FIELDS, SORTABLE_FIELDS
from core.domain.exceptions import FieldViolation, ValidationFailedError
from core.domain.value_objects import Criterion, FilterType, SortDirection, SortOrder

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100
# Largest row offset the database accepts (signed 64-bit).
MAX_OFFSET = 2**63 - 1

SORTING_PARAM = re.compile(r"^sorting\[([^\[\]]+)\]$")
CRITERIA_PARAM = re.compile(r"^criteria\[([^\[\]]+)\](?:\[(type|value)\])?$")


def _choices(values) -> str:
    return ", ".join(f'"{value}"' for value in values)


def _positive_int(params, name: str, default: int, violations: List[FieldViolation]) -> int:
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        violations.append(FieldViolation(name, "invalid", "A valid integer is required."))
        return default
    if value < 1:
        violations.append(
            FieldViolation(name, "min_value", "Ensure this value is greater than or equal to 1.")
        )
        return default
    return value


def _parse_sorting(params, violations: List[FieldViolation]) -> List[SortOrder]:
    sorting = []
    for key in params.keys():
        match = SORTING_PARAM.match(key)
        if not match:
            continue
        field = match.group(1)
        if field not in SORTABLE_FIELDS:
            violations.append(
                FieldViolation(
                    key,
                    "invalid_choice",
                    f'"{field}" is not a valid sort field. Choose from {_choices(SORTABLE_FIELDS)}.',
                )
            )
            continue
        raw = (params.get(key) or "").strip().lower()
        try:
            direction = SortDirection(raw)
        except ValueError:
            violations.append(
                FieldViolation(key, "invalid_choice", f'"{raw}" is not a valid sort direction.')
            )
            continue
        sorting.append(SortOrder(field=field, direction=direction))
    return sorting


def _parse_criteria(params, violations: List[FieldViolation]) -> List[Criterion]:
    parts: Dict[str, Dict[str, str]] = {}
    for key in params.keys():
        match = CRITERIA_PARAM.match(key)
        if not match:
            continue
        field, part = match.group(1), match.group(2) or "value"
        if field not in FILTERABLE_FIELDS:
            violations.append(
                FieldViolation(
                    f"criteria[{field}]",
                    "invalid_choice",
                    f'"{field}" is not a valid filter field. '
                    f"Choose from {_choices(FILTERABLE_FIELDS)}.",
                )
            )
            continue
        parts.setdefault(field, {})[part] = (params.get(key) or "").strip()

    criteria = []
    for field, part in parts.items():
        criterion = _build_criterion(field, part, violations)
        if criterion:
            criteria.append(criterion)
    return criteria


def _build_criterion(
    field: str, part: Dict[str, str], violations: List[FieldViolation]
) -> Optional[Criterion]:
    raw_type = part.get("type") or FilterType.CONTAINS.value
    try:
        filter_type = FilterType(raw_type.lower())
    except ValueError:
        violations.append(
            FieldViolation(
                f"criteria[{field}][type]",
                "invalid_choice",
                f'"{raw_type}" is not a valid filter type. '
                f"Choose from {_choices(t.value for t in FilterType)}.",
            )
        )
        return None

    value = part.get("value", "")
    if filter_type.requires_value and not value:
        # An empty search box filters nothing.
        return None
    return Criterion(field=field, type=filter_type, value=value)


def parse_list_query(params) -> ListBrandsQuery:
    """
    Build a ListBrandsQuery from request query parameters.

    ``limit`` is capped at BRANDS_MAX_PAGE_LIMIT rather than rejected;
    ``page`` is rejected once its row offset would overflow the database.

    Args:
        params: ``request.query_params``

    Returns:
        ListBrandsQuery

    Raises:
        ValidationFailedError: If any parameter is malformed
    """
    violations: List[FieldViolation] = []
    default_limit = getattr(settings, "BRANDS_DEFAULT_PAGE_LIMIT", DEFAULT_PAGE_LIMIT)
    max_limit = getattr(settings, "BRANDS_MAX_PAGE_LIMIT", MAX_PAGE_LIMIT)

    page = _positive_int(params, "page", 1, violations)
    limit = min(_positive_int(params, "limit", default_limit, violations), max_limit)
    max_page = MAX_OFFSET // limit + 1
    if page > max_page:
        violations.append(
            FieldViolation(
                "page", "max_value", f"Ensure this value is less than or equal to {max_page}."
            )
        )
    sorting = _parse_sorting(params, violations)
    criteria = _parse_criteria(params, violations)

    if violations:
        raise ValidationFailedError(violations, message="Invalid list parameters")

    return ListBrandsQuery(page=page, limit=limit, criteria=criteria, sorting=sorting)

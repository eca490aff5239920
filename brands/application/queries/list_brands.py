"""
ListBrandsQuery.

Query for one page of brands, filtered and sorted.
"""
from dataclasses import dataclass, field
from typing import List

from core.domain.value_objects import Criterion, SortOrder


@dataclass
class ListBrandsQuery:
    """
    Query to list brands.

    Criteria all apply together; sort keys apply in order.
    """

    page: int = 1
    limit: int = 10
    criteria: List[Criterion] = field(default_factory=list)
    sorting: List[SortOrder] = field(default_factory=list)

"""
GetBrandQuery.
"""
from dataclasses import dataclass


@dataclass
class GetBrandQuery:
    """Query for one brand by slug or id."""

    identifier: str

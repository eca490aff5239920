"""
UpdateBrandCommand.

Command to update a brand with merge (partial) or replace (full) semantics.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from core.domain.exceptions import FieldViolation


@dataclass
class UpdateBrandCommand:
    """
    Command to update a brand.

    With ``partial`` set, fields left as None keep their value.
    Otherwise name and slug are both required. ``violations`` carries
    request-shape errors found before the brand was looked up; they are
    reported only once the identifier resolves.
    """

    identifier: str
    name: Optional[str] = None
    slug: Optional[str] = None
    partial: bool = False
    violations: List[FieldViolation] = field(default_factory=list)

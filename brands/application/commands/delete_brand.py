"""
DeleteBrandCommand.
"""
from dataclasses import dataclass


@dataclass
class DeleteBrandCommand:
    """Command to delete a brand and its images."""

    identifier: str

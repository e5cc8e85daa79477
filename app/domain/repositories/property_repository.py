"""
Property Repository Interface.
Defines specific data access operations for listings.
"""

from typing import List

from app.domain.repositories.base import BaseRepository
from app.domain.models.property import Property
from app.domain.schemas.property import PropertyFilter


class PropertyRepository(BaseRepository[Property]):
    """Interface for Property-specific operations."""

    def get_with_filters(self, filters: PropertyFilter) -> List[Property]:
        """Get listings matching the filters, newest first."""
        ...

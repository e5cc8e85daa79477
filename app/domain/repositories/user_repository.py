"""
User Repository Interface.
Identity store operations, including the favorites set.
"""

from typing import List, Optional

from app.domain.repositories.base import BaseRepository
from app.domain.models.property import Property
from app.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        """Get the user who logs in with this phone number."""
        ...

    def phone_number_taken(self, phone_number: str, exclude_user_id: Optional[int] = None) -> bool:
        """Whether another user already owns this phone number."""
        ...

    def add_saved_property(self, user_id: int, property_id: int) -> bool:
        """Set-add. Returns False when the property was already saved."""
        ...

    def remove_saved_property(self, user_id: int, property_id: int) -> bool:
        """Set-remove. Returns False when the property was not saved."""
        ...

    def list_saved_property_ids(self, user_id: int) -> List[int]:
        """Ids of the user's favorites."""
        ...

    def list_saved_properties(self, user_id: int) -> List[Property]:
        """The user's favorites as full records."""
        ...

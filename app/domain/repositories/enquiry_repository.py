"""
Enquiry Repository Interface.
"""

from typing import List

from app.domain.repositories.base import BaseRepository
from app.domain.models.enquiry import Enquiry, EnquiryMessage


class EnquiryRepository(BaseRepository[Enquiry]):
    """Interface for Enquiry-specific operations."""

    def list_by_sender(self, sender_id: int) -> List[Enquiry]:
        """Enquiries sent by a user, minus those the sender deleted."""
        ...

    def list_by_recipient(self, agent_id: int) -> List[Enquiry]:
        """Enquiries addressed to an agent, minus those the agent deleted."""
        ...

    def add_message(self, enquiry: Enquiry, sender_id: int, message: str) -> EnquiryMessage:
        """Append an entry to the enquiry's conversation."""
        ...

    def save(self, enquiry: Enquiry) -> Enquiry:
        """Persist changes made to a loaded enquiry."""
        ...

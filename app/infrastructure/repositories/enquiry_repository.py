"""
SQLAlchemy Implementation of Enquiry Repository.
"""

from typing import List

from app.domain.models.enquiry import Enquiry, EnquiryMessage
from app.domain.repositories.enquiry_repository import EnquiryRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyEnquiryRepository(SQLAlchemyRepository[Enquiry], EnquiryRepository):
    """Enquiry repository implementation using SQLAlchemy."""

    def list_by_sender(self, sender_id: int) -> List[Enquiry]:
        return (
            self.db.query(Enquiry)
            .filter(Enquiry.sender_id == sender_id, Enquiry.deleted_for_sender_at.is_(None))
            .order_by(Enquiry.created_at.desc(), Enquiry.id.desc())
            .all()
        )

    def list_by_recipient(self, agent_id: int) -> List[Enquiry]:
        return (
            self.db.query(Enquiry)
            .filter(Enquiry.recipient_agent_id == agent_id, Enquiry.deleted_for_agent_at.is_(None))
            .order_by(Enquiry.created_at.desc(), Enquiry.id.desc())
            .all()
        )

    def add_message(self, enquiry: Enquiry, sender_id: int, message: str) -> EnquiryMessage:
        entry = EnquiryMessage(sender_id=sender_id, message=message)
        enquiry.conversation.append(entry)
        self.db.add(enquiry)
        self._commit(enquiry)
        return entry

    def save(self, enquiry: Enquiry) -> Enquiry:
        self.db.add(enquiry)
        return self._commit(enquiry)

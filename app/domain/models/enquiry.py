"""Enquiry domain models — 'enquiries' and their conversation log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base

STATUS_SENT = "sent"
STATUS_READ = "read"
STATUS_REPLIED = "replied"
# Position in the status machine. Status only ever moves to a higher rank.
STATUS_RANK = {STATUS_SENT: 0, STATUS_READ: 1, STATUS_REPLIED: 2}

MESSAGE_MAX_LENGTH = 500


class Enquiry(Base):
    __tablename__ = "enquiries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Captured from Property.agent_id when the enquiry is created, never re-derived
    recipient_agent_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(String(MESSAGE_MAX_LENGTH), nullable=False)
    status = Column(String(20), nullable=False, default=STATUS_SENT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    read_at = Column(DateTime(timezone=True), nullable=True)
    replied_at = Column(DateTime(timezone=True), nullable=True)
    # Deletion hides the thread from one side only; an admin delete stamps both
    deleted_for_sender_at = Column(DateTime(timezone=True), nullable=True)
    deleted_for_agent_at = Column(DateTime(timezone=True), nullable=True)

    property = relationship("Property", lazy="joined")
    sender = relationship("User", foreign_keys=[sender_id], lazy="joined")
    recipient_agent = relationship("User", foreign_keys=[recipient_agent_id], lazy="joined")
    conversation = relationship(
        "EnquiryMessage",
        back_populates="enquiry",
        order_by="EnquiryMessage.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Enquiry {self.id} [{self.status}]>"


class EnquiryMessage(Base):
    __tablename__ = "enquiry_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    enquiry_id = Column(Integer, ForeignKey("enquiries.id", ondelete="CASCADE"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    message = Column(String(MESSAGE_MAX_LENGTH), nullable=False)
    timestamp = Column(DateTime(timezone=True), server_default=func.now())

    enquiry = relationship("Enquiry", back_populates="conversation")
    sender = relationship("User", lazy="joined")

    def __repr__(self):
        return f"<EnquiryMessage {self.id} on enquiry {self.enquiry_id}>"

"""Pydantic schemas for Enquiry domain."""

from datetime import datetime
from typing import Optional

from app.domain.schemas.auth import UserSummary
from app.domain.schemas.base import CamelModel
from app.domain.schemas.property import PropertySummary


class EnquiryCreate(CamelModel):
    property_id: Optional[int] = None
    message: Optional[str] = None


class MessageCreate(CamelModel):
    message: Optional[str] = None


class ConversationEntry(CamelModel):
    id: int
    sender_id: int
    sender: Optional[UserSummary] = None
    message: str
    timestamp: Optional[datetime] = None


class EnquiryRead(CamelModel):
    id: int
    property: Optional[PropertySummary] = None
    sender: UserSummary
    recipient_agent: UserSummary
    message: str
    status: str
    conversation: list[ConversationEntry] = []
    created_at: Optional[datetime] = None
    read_at: Optional[datetime] = None
    replied_at: Optional[datetime] = None

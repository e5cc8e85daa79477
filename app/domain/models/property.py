"""Property domain model — maps to the 'properties' table."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base

PROPERTY_TYPES = ("House", "Apartment", "Land", "Commercial", "Office")
LISTING_TYPES = ("For Sale", "For Rent")


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    currency = Column(String(10), nullable=False)
    property_type = Column(String(20), nullable=False, index=True)
    listing_type = Column(String(20), nullable=False, index=True)
    bedrooms = Column(Integer, nullable=False, default=0)
    bathrooms = Column(Integer, nullable=False, default=0)
    living_rooms = Column(Integer, nullable=False, default=0)
    contact_name = Column(String(200), nullable=False)
    location = Column(String(500), nullable=False)
    longitude = Column(Float, nullable=True)
    latitude = Column(Float, nullable=True)
    photos = Column(JSON, nullable=False, default=list)
    agent_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    is_available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    agent = relationship("User", foreign_keys=[agent_id], lazy="joined")

    def __repr__(self):
        return f"<Property {self.id} - {self.title}>"

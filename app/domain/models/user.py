"""User domain model — maps to the 'users' table."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base

ROLE_USER = "user"
ROLE_AGENT = "agent"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_AGENT, ROLE_ADMIN)

# Favorites. The composite primary key keeps membership unique.
saved_properties_table = Table(
    "saved_properties",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("property_id", Integer, ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True, index=True)  # not unique
    phone_number = Column(String(20), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_USER)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    saved_properties = relationship(
        "Property",
        secondary=saved_properties_table,
        order_by="Property.id",
        viewonly=True,
    )

    def __repr__(self):
        return f"<User {self.id} ({self.role})>"

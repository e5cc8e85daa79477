"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError

from app.domain.models.property import Property
from app.domain.models.user import User, saved_properties_table
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_phone_number(self, phone_number: str) -> Optional[User]:
        return self.db.query(User).filter(User.phone_number == phone_number).first()

    def phone_number_taken(self, phone_number: str, exclude_user_id: Optional[int] = None) -> bool:
        query = self.db.query(User.id).filter(User.phone_number == phone_number)
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        return query.first() is not None

    # Favorites are changed with single INSERT/DELETE statements on the
    # association table, never by rewriting the whole set.

    def add_saved_property(self, user_id: int, property_id: int) -> bool:
        try:
            self.db.execute(
                insert(saved_properties_table).values(user_id=user_id, property_id=property_id)
            )
            self.db.commit()
        except IntegrityError:
            # Primary key already present: a concurrent save won
            self.db.rollback()
            return False
        return True

    def remove_saved_property(self, user_id: int, property_id: int) -> bool:
        result = self.db.execute(
            delete(saved_properties_table).where(
                saved_properties_table.c.user_id == user_id,
                saved_properties_table.c.property_id == property_id,
            )
        )
        self.db.commit()
        return result.rowcount > 0

    def list_saved_property_ids(self, user_id: int) -> List[int]:
        rows = self.db.execute(
            select(saved_properties_table.c.property_id)
            .where(saved_properties_table.c.user_id == user_id)
            .order_by(saved_properties_table.c.property_id)
        )
        return [r[0] for r in rows]

    def list_saved_properties(self, user_id: int) -> List[Property]:
        return (
            self.db.query(Property)
            .join(saved_properties_table, saved_properties_table.c.property_id == Property.id)
            .filter(saved_properties_table.c.user_id == user_id)
            .order_by(saved_properties_table.c.created_at.desc(), Property.id.desc())
            .all()
        )

"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Generic, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.domain.repositories.base import BaseRepository, Values
from app.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    @staticmethod
    def _as_dict(values: Values) -> dict:
        if isinstance(values, BaseModel):
            return values.model_dump(exclude_unset=True)
        return dict(values)

    def _commit(self, record: ModelType) -> ModelType:
        """Commit and reload; the session is rolled back if the commit fails."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(record)
        return record

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def create(self, values: Values) -> ModelType:
        record = self.model(**self._as_dict(values))
        self.db.add(record)
        return self._commit(record)

    def update(self, record: ModelType, values: Values) -> ModelType:
        for field, value in self._as_dict(values).items():
            if hasattr(record, field):
                setattr(record, field, value)

        self.db.add(record)
        return self._commit(record)

    def delete(self, id: int) -> Optional[ModelType]:
        record = self.db.get(self.model, id)
        if record is None:
            return None
        self.db.delete(record)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return record

"""
SQLAlchemy Implementation of Property Repository.
"""

from typing import List

from sqlalchemy import or_

from app.domain.models.property import Property
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.schemas.property import PropertyFilter
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


def _contains(column, text: str):
    # User text matches literally; % and _ are not wildcards
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


class SQLAlchemyPropertyRepository(SQLAlchemyRepository[Property], PropertyRepository):
    """Property repository implementation using SQLAlchemy."""

    def get_with_filters(self, filters: PropertyFilter) -> List[Property]:
        query = self.db.query(Property)

        if filters.listing_type:
            query = query.filter(Property.listing_type == filters.listing_type)
        if filters.property_types:
            query = query.filter(Property.property_type.in_(filters.property_types))

        # Exact counts win over ranges when both are given
        if filters.bedrooms is not None:
            query = query.filter(Property.bedrooms == filters.bedrooms)
        else:
            if filters.bedrooms_min is not None:
                query = query.filter(Property.bedrooms >= filters.bedrooms_min)
            if filters.bedrooms_max is not None:
                query = query.filter(Property.bedrooms <= filters.bedrooms_max)

        if filters.bathrooms is not None:
            query = query.filter(Property.bathrooms == filters.bathrooms)
        else:
            if filters.bathrooms_min is not None:
                query = query.filter(Property.bathrooms >= filters.bathrooms_min)
            if filters.bathrooms_max is not None:
                query = query.filter(Property.bathrooms <= filters.bathrooms_max)

        if filters.price_min is not None:
            query = query.filter(Property.price >= filters.price_min)
        if filters.price_max is not None:
            query = query.filter(Property.price <= filters.price_max)
        if filters.location:
            query = query.filter(_contains(Property.location, filters.location))
        if filters.keyword:
            query = query.filter(or_(
                _contains(Property.title, filters.keyword),
                _contains(Property.description, filters.keyword),
                _contains(Property.location, filters.keyword),
            ))
        if filters.is_available is not None:
            query = query.filter(Property.is_available == filters.is_available)

        return (
            query.order_by(Property.created_at.desc(), Property.id.desc())
            .offset(filters.skip)
            .limit(filters.limit)
            .all()
        )

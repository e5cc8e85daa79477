"""Pydantic schemas for Property domain."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from app.domain.schemas.base import CamelModel


class GeoPoint(BaseModel):
    """GeoJSON point; ``coordinates`` is ``[longitude, latitude]``."""
    type: str = "Point"
    coordinates: list[float]


class PropertyWrite(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    property_type: Optional[str] = None
    listing_type: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    living_rooms: Optional[int] = None
    contact_name: Optional[str] = None
    location: Optional[str] = None
    coordinates: Optional[GeoPoint] = None
    photos: Optional[list[str]] = None
    is_available: Optional[bool] = None


class PropertyCreate(PropertyWrite):
    pass


class PropertyUpdate(PropertyWrite):
    pass


class PropertyRead(CamelModel):
    id: int
    title: str
    description: str
    price: float
    currency: str
    property_type: str
    listing_type: str
    bedrooms: int
    bathrooms: int
    living_rooms: int
    contact_name: str
    location: str
    coordinates: Optional[GeoPoint] = None
    photos: list[str] = []
    agent_id: Optional[int] = None
    is_available: bool
    created_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def _point_from_columns(cls, data: Any) -> Any:
        # ORM rows store the point as two float columns
        if isinstance(data, dict) or not hasattr(data, "longitude"):
            return data
        values = {name: getattr(data, name, None) for name in cls.model_fields}
        if data.longitude is not None and data.latitude is not None:
            values["coordinates"] = {"type": "Point", "coordinates": [data.longitude, data.latitude]}
        else:
            values["coordinates"] = None
        return values


class PropertySummary(CamelModel):
    id: int
    title: str
    location: str
    photos: list[str] = []


class PropertyFilter(BaseModel):
    listing_type: Optional[str] = None
    property_types: list[str] = Field(default_factory=list)
    bedrooms: Optional[int] = None
    bedrooms_min: Optional[int] = None
    bedrooms_max: Optional[int] = None
    bathrooms: Optional[int] = None
    bathrooms_min: Optional[int] = None
    bathrooms_max: Optional[int] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    location: Optional[str] = None
    keyword: Optional[str] = None
    is_available: Optional[bool] = None
    skip: int = 0
    limit: int = 100

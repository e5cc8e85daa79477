"""Pydantic schemas for uploads and geocoding results."""

from app.domain.schemas.base import CamelModel


class UploadedImage(CamelModel):
    url: str
    provider_id: str


class GeocodeResult(CamelModel):
    display_name: str
    latitude: float
    longitude: float

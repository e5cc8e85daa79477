"""Geocoding API routes — address search and reverse lookup."""

from fastapi import APIRouter, Depends, Query

from app.core.exceptions import EntityNotFoundException
from app.infrastructure.geocoder import NominatimGeocoder
from app.interfaces.deps import get_geocoder

router = APIRouter(prefix="/api/geocode", tags=["Geocoding"])


@router.get("/search")
async def search(
    q: str = Query(..., min_length=2),
    limit: int = Query(5, ge=1, le=20),
    geocoder: NominatimGeocoder = Depends(get_geocoder),
):
    results = await geocoder.search(q, limit=limit)
    return {"success": True, "count": len(results), "data": results}


@router.get("/reverse")
async def reverse(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    geocoder: NominatimGeocoder = Depends(get_geocoder),
):
    result = await geocoder.reverse(lat, lon)
    if result is None:
        raise EntityNotFoundException("No address found for these coordinates")
    return {"success": True, "data": result}

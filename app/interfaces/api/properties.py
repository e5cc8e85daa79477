"""Properties API routes — public browsing, listing creation and owner edits."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.config import get_settings
from app.application.services.property_service import (
    create_property,
    delete_property,
    get_property,
    list_properties,
    update_property,
)
from app.domain.identity import Identity
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.schemas.property import PropertyCreate, PropertyFilter, PropertyRead, PropertyUpdate
from app.interfaces.api.deps import get_current_identity, get_optional_identity
from app.interfaces.deps import get_property_repository

settings = get_settings()
router = APIRouter(prefix="/api/properties", tags=["Properties"])


def _split_types(values: Optional[List[str]]) -> List[str]:
    """Accept ``?propertyType=House,Land`` as well as repeated parameters."""
    types = []
    for value in values or []:
        types.extend(t.strip() for t in value.split(",") if t.strip())
    return types


@router.get("")
def list_all(
    listing_type: Optional[str] = Query(None, alias="listingType"),
    property_type: Optional[List[str]] = Query(None, alias="propertyType"),
    bedrooms: Optional[int] = Query(None, ge=0),
    bedrooms_min: Optional[int] = Query(None, alias="bedroomsMin", ge=0),
    bedrooms_max: Optional[int] = Query(None, alias="bedroomsMax", ge=0),
    bathrooms: Optional[int] = Query(None, ge=0),
    bathrooms_min: Optional[int] = Query(None, alias="bathroomsMin", ge=0),
    bathrooms_max: Optional[int] = Query(None, alias="bathroomsMax", ge=0),
    price_min: Optional[float] = Query(None, alias="priceMin", ge=0, allow_inf_nan=False),
    price_max: Optional[float] = Query(None, alias="priceMax", ge=0, allow_inf_nan=False),
    location: Optional[str] = None,
    keyword: Optional[str] = None,
    is_available: Optional[bool] = Query(None, alias="isAvailable"),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    repo: PropertyRepository = Depends(get_property_repository),
):
    filters = PropertyFilter(
        listing_type=listing_type or None,
        property_types=_split_types(property_type),
        bedrooms=bedrooms,
        bedrooms_min=bedrooms_min,
        bedrooms_max=bedrooms_max,
        bathrooms=bathrooms,
        bathrooms_min=bathrooms_min,
        bathrooms_max=bathrooms_max,
        price_min=price_min,
        price_max=price_max,
        location=location.strip() if location else None,
        keyword=keyword.strip() if keyword else None,
        is_available=is_available,
        skip=skip,
        limit=min(limit or settings.PROPERTY_LIST_DEFAULT_LIMIT, settings.PROPERTY_LIST_MAX_LIMIT),
    )
    items = [PropertyRead.model_validate(p) for p in list_properties(repo, filters)]
    return {"success": True, "count": len(items), "data": items}


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    body: PropertyCreate,
    identity: Optional[Identity] = Depends(get_optional_identity),
    repo: PropertyRepository = Depends(get_property_repository),
):
    prop = create_property(repo, body, identity)
    return {"success": True, "data": PropertyRead.model_validate(prop)}


@router.get("/{property_id}")
def get_one(
    property_id: int,
    repo: PropertyRepository = Depends(get_property_repository),
):
    return {"success": True, "data": PropertyRead.model_validate(get_property(repo, property_id))}


@router.put("/{property_id}")
def update(
    property_id: int,
    body: PropertyUpdate,
    identity: Identity = Depends(get_current_identity),
    repo: PropertyRepository = Depends(get_property_repository),
):
    prop = update_property(repo, identity, property_id, body)
    return {"success": True, "data": PropertyRead.model_validate(prop)}


@router.delete("/{property_id}")
def delete(
    property_id: int,
    identity: Identity = Depends(get_current_identity),
    repo: PropertyRepository = Depends(get_property_repository),
):
    delete_property(repo, identity, property_id)
    return {"success": True, "data": {}}

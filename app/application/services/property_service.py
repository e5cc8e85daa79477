"""Property service — listing queries, creation and owner edits."""

from typing import Any, Dict, List, Optional

import structlog

from app.config import get_settings
from app.core.exceptions import EntityNotFoundException
from app.domain.identity import Identity
from app.domain.models.property import Property
from app.domain.policies import can_modify_property
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.schemas.property import PropertyCreate, PropertyFilter, PropertyUpdate, PropertyWrite
from app.domain.validation import FieldError, raise_for_errors, validate_property

settings = get_settings()
logger = structlog.get_logger(__name__)

DEFAULTS = {
    "bedrooms": 0,
    "bathrooms": 0,
    "living_rooms": 0,
    "photos": [],
    "is_available": True,
}
TEXT_FIELDS = ("title", "description", "contact_name", "location", "currency")


def _to_columns(body: PropertyWrite) -> tuple[Dict[str, Any], List[FieldError]]:
    """Map the request onto column values, unpacking the GeoJSON point."""
    data = body.model_dump(exclude_unset=True)
    errors: List[FieldError] = []

    for field in TEXT_FIELDS:
        if isinstance(data.get(field), str):
            data[field] = data[field].strip()

    if "coordinates" in data:
        point = data.pop("coordinates")
        if point is None:
            data["longitude"] = data["latitude"] = None
        elif point.get("type") != "Point" or len(point.get("coordinates") or []) != 2:
            errors.append(FieldError("coordinates", "Coordinates must be a [longitude, latitude] pair"))
        else:
            data["longitude"], data["latitude"] = point["coordinates"]
    return data, errors


def list_properties(repo: PropertyRepository, filters: PropertyFilter) -> List[Property]:
    return repo.get_with_filters(filters)


def get_property(repo: PropertyRepository, property_id: int) -> Property:
    prop = repo.get_by_id(property_id)
    if prop is None:
        raise EntityNotFoundException("Property not found")
    return prop


def create_property(
    repo: PropertyRepository,
    body: PropertyCreate,
    identity: Optional[Identity] = None,
) -> Property:
    data, errors = _to_columns(body)
    data = {**DEFAULTS, **{k: v for k, v in data.items() if v is not None}}
    data["photos"] = list(data["photos"])
    if not data.get("currency"):
        data["currency"] = settings.DEFAULT_CURRENCY

    raise_for_errors(errors + validate_property(data))

    data["agent_id"] = identity.id if identity else None
    prop = repo.create(data)
    logger.info("Property created", property_id=prop.id, agent_id=prop.agent_id)
    return prop


def update_property(
    repo: PropertyRepository,
    identity: Identity,
    property_id: int,
    body: PropertyUpdate,
) -> Property:
    prop = get_property(repo, property_id)
    can_modify_property(identity, prop).enforce()

    changes, errors = _to_columns(body)
    # Columns that cannot be cleared fall back to their defaults
    for field, default in DEFAULTS.items():
        if field in changes and changes[field] is None:
            changes[field] = list(default) if isinstance(default, list) else default
    if "currency" in changes and not changes["currency"]:
        changes["currency"] = settings.DEFAULT_CURRENCY

    current = {column.name: getattr(prop, column.name) for column in Property.__table__.columns}
    raise_for_errors(errors + validate_property({**current, **changes}))

    prop = repo.update(prop, changes)
    logger.info("Property updated", property_id=prop.id, fields=sorted(changes))
    return prop


def delete_property(repo: PropertyRepository, identity: Identity, property_id: int) -> None:
    prop = get_property(repo, property_id)
    can_modify_property(identity, prop).enforce()
    repo.delete(prop.id)
    logger.info("Property deleted", property_id=property_id, by=identity.id)

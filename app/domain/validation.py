"""
Explicit input validation.

Each validator returns every problem it finds as a list of ``FieldError``
instead of stopping at the first one. Nothing here depends on the ORM.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from app.core.exceptions import ValidationException
from app.domain.models.enquiry import MESSAGE_MAX_LENGTH
from app.domain.models.property import LISTING_TYPES, PROPERTY_TYPES
from app.domain.models.user import ROLE_AGENT, ROLE_USER

EMAIL_PATTERN = re.compile(r"^[^\s@<>()\[\]\\,;:\"]+@([a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}$")
PHONE_PATTERN = re.compile(r"^\+?[0-9]{8,15}$")
PASSWORD_MIN_LENGTH = 6
TITLE_MAX_LENGTH = 100
SELF_REGISTER_ROLES = (ROLE_USER, ROLE_AGENT)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


def raise_for_errors(errors: Iterable[FieldError]) -> None:
    errors = list(errors)
    if errors:
        raise ValidationException(
            [e.message for e in errors],
            details={"fields": [e.field for e in errors]},
        )


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_phone_number(value: Optional[str]) -> Optional[str]:
    """Strip spaces, dashes and parentheses a user may type."""
    if value is None:
        return None
    return re.sub(r"[\s\-().]", "", value)


def validate_name(name: Optional[str]) -> List[FieldError]:
    if _blank(name):
        return [FieldError("name", "Please add a name")]
    return []


def validate_email(email: Optional[str]) -> List[FieldError]:
    if _blank(email):
        return []
    if not EMAIL_PATTERN.match(email.strip()):
        return [FieldError("email", "Please add a valid email")]
    return []


def validate_phone_number(phone_number: Optional[str], field: str = "phoneNumber") -> List[FieldError]:
    if _blank(phone_number):
        return [FieldError(field, "Please add a phone number")]
    if not PHONE_PATTERN.match(phone_number):
        return [FieldError(field, "Please add a valid phone number")]
    return []


def validate_password(password: Optional[str]) -> List[FieldError]:
    if not password:
        return [FieldError("password", "Please add a password")]
    if len(password) < PASSWORD_MIN_LENGTH:
        return [FieldError("password", f"Password must be at least {PASSWORD_MIN_LENGTH} characters")]
    return []


def validate_registration(data: Mapping[str, Any]) -> List[FieldError]:
    errors = validate_name(data.get("name"))
    errors += validate_phone_number(data.get("phone_number"))
    errors += validate_email(data.get("email"))
    errors += validate_password(data.get("password"))
    role = data.get("role")
    # Admins are provisioned by the server, never self-registered
    if role is not None and role not in SELF_REGISTER_ROLES:
        errors.append(FieldError("role", f"Role must be one of: {', '.join(SELF_REGISTER_ROLES)}"))
    return errors


def validate_profile(data: Mapping[str, Any]) -> List[FieldError]:
    return validate_name(data.get("name")) + validate_email(data.get("email"))


def _validate_count(data: Mapping[str, Any], field: str, label: str) -> List[FieldError]:
    value = data.get(field)
    if value is not None and value < 0:
        return [FieldError(field, f"{label} cannot be negative")]
    return []


def validate_property(data: Mapping[str, Any]) -> List[FieldError]:
    """Validate a complete property record (after defaults and merges)."""
    errors: List[FieldError] = []

    title = data.get("title")
    if _blank(title):
        errors.append(FieldError("title", "Please add a title for the property"))
    elif len(title.strip()) > TITLE_MAX_LENGTH:
        errors.append(FieldError("title", f"Title can not be more than {TITLE_MAX_LENGTH} characters"))

    if _blank(data.get("description")):
        errors.append(FieldError("description", "Please add a description"))

    price = data.get("price")
    if price is None:
        errors.append(FieldError("price", "Please add a price"))
    elif not math.isfinite(price):
        errors.append(FieldError("price", "Price must be a finite number"))
    elif price < 0:
        errors.append(FieldError("price", "Price cannot be negative"))

    if data.get("property_type") not in PROPERTY_TYPES:
        errors.append(FieldError(
            "propertyType",
            f"Please select a property type ({', '.join(PROPERTY_TYPES)})",
        ))
    if data.get("listing_type") not in LISTING_TYPES:
        errors.append(FieldError("listingType", "Please specify if property is for sale or rent"))

    errors += _validate_count(data, "bedrooms", "Bedrooms")
    errors += _validate_count(data, "bathrooms", "Bathrooms")
    errors += _validate_count(data, "living_rooms", "Living rooms")

    if _blank(data.get("contact_name")):
        errors.append(FieldError("contactName", "Please provide a contact name (your name or agency name)"))
    if _blank(data.get("location")):
        errors.append(FieldError("location", "Please add a location"))

    longitude, latitude = data.get("longitude"), data.get("latitude")
    if (longitude is None) != (latitude is None):
        errors.append(FieldError("coordinates", "Coordinates must be a [longitude, latitude] pair"))
    elif longitude is not None:
        # NaN and infinities fail these comparisons too
        if not -180 <= longitude <= 180 or not -90 <= latitude <= 90:
            errors.append(FieldError("coordinates", "Coordinates are out of range"))

    for url in data.get("photos") or []:
        if _blank(url):
            errors.append(FieldError("photos", "Photo URLs cannot be empty"))
            break

    return errors


def validate_message(message: Optional[str]) -> List[FieldError]:
    if _blank(message):
        return [FieldError("message", "Message cannot be empty")]
    if len(message.strip()) > MESSAGE_MAX_LENGTH:
        return [FieldError("message", f"Message cannot be more than {MESSAGE_MAX_LENGTH} characters")]
    return []

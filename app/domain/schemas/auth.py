"""Pydantic schemas for User and Auth.

Request bodies keep every field optional; required-ness and formats are
checked by ``app.domain.validation`` so that all field errors are reported
together.
"""

from datetime import datetime
from typing import Optional

from app.domain.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(CamelModel):
    phone_number: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None


class ChangePhoneRequest(CamelModel):
    current_password: Optional[str] = None
    new_phone_number: Optional[str] = None


class UserRead(CamelModel):
    id: int
    name: str
    email: Optional[str] = None
    phone_number: str
    role: str
    created_at: Optional[datetime] = None


class UserSummary(CamelModel):
    """Contact details shown to the other side of an enquiry."""
    id: int
    name: str
    phone_number: str
    email: Optional[str] = None


class AuthResponse(CamelModel):
    success: bool = True
    token: str
    user: UserRead

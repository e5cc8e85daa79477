"""Auth service — JWT token management, password hashing and profile changes."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError

from app.config import get_settings
from app.core.exceptions import (
    BadRequestException,
    DuplicateFieldException,
    EntityNotFoundException,
    InvalidCredentialsException,
    UnauthorizedException,
)
from app.domain.identity import Identity
from app.domain.models.user import ROLE_ADMIN, ROLE_USER, User
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    ChangePhoneRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
)
from app.domain.validation import (
    normalize_phone_number,
    raise_for_errors,
    validate_password,
    validate_phone_number,
    validate_profile,
    validate_registration,
)

settings = get_settings()
logger = structlog.get_logger(__name__)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)
# Verified against when the login phone is unknown
_DUMMY_HASH = pwd_context.hash("soudou-dummy-password")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode = {
        "id": user.id,
        "role": user.role,
        "phoneNumber": user.phone_number,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def identity_from_token(token: str) -> Identity:
    """Verify signature and expiry and return the identity. No database access."""
    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedException("Not authorized, token failed")

    user_id, role, phone_number = payload.get("id"), payload.get("role"), payload.get("phoneNumber")
    if user_id is None or role is None or phone_number is None:
        raise UnauthorizedException("Not authorized, token failed")
    return Identity(id=int(user_id), role=role, phone_number=phone_number)


def get_user(repo: UserRepository, identity: Identity) -> User:
    user = repo.get_by_id(identity.id)
    if user is None:
        raise EntityNotFoundException("User not found")
    return user


def register_user(repo: UserRepository, body: RegisterRequest) -> User:
    data = body.model_dump()
    data["phone_number"] = normalize_phone_number(data["phone_number"])
    raise_for_errors(validate_registration(data))

    if repo.phone_number_taken(data["phone_number"]):
        raise DuplicateFieldException("phoneNumber")

    try:
        user = repo.create({
            "name": data["name"].strip(),
            "phone_number": data["phone_number"],
            "email": data["email"].strip() if data["email"] else None,
            "password_hash": hash_password(data["password"]),
            "role": data["role"] or ROLE_USER,
        })
    except IntegrityError:
        # Lost a race with a concurrent registration of the same phone
        raise DuplicateFieldException("phoneNumber")

    logger.info("User registered", user_id=user.id, role=user.role)
    return user


def authenticate_user(repo: UserRepository, body: LoginRequest) -> User:
    if not body.phone_number or not body.password:
        raise BadRequestException("Please enter a phone number and password")

    user = repo.get_by_phone_number(normalize_phone_number(body.phone_number))
    # Same failure, and the same bcrypt cost, for an unknown phone and a wrong password
    password_hash = user.password_hash if user is not None else _DUMMY_HASH
    if not verify_password(body.password, password_hash) or user is None:
        logger.info("Login failed", phone_number=body.phone_number)
        raise InvalidCredentialsException()

    logger.info("User logged in", user_id=user.id)
    return user


def update_profile(repo: UserRepository, identity: Identity, body: UpdateProfileRequest) -> User:
    user = get_user(repo, identity)
    changes = body.model_dump(exclude_unset=True)
    changes = {k: v.strip() if isinstance(v, str) else v for k, v in changes.items()}
    if changes.get("email") == "":
        changes["email"] = None

    merged = {"name": user.name, "email": user.email, **changes}
    raise_for_errors(validate_profile(merged))

    user = repo.update(user, changes)
    logger.info("Profile updated", user_id=user.id, fields=sorted(changes))
    return user


def change_phone_number(repo: UserRepository, identity: Identity, body: ChangePhoneRequest) -> User:
    user = get_user(repo, identity)
    if not body.current_password or not verify_password(body.current_password, user.password_hash):
        raise InvalidCredentialsException()

    new_phone = normalize_phone_number(body.new_phone_number)
    raise_for_errors(validate_phone_number(new_phone, field="newPhoneNumber"))
    if new_phone == user.phone_number:
        return user
    if repo.phone_number_taken(new_phone, exclude_user_id=user.id):
        raise DuplicateFieldException("phoneNumber")

    try:
        user = repo.update(user, {"phone_number": new_phone})
    except IntegrityError:
        raise DuplicateFieldException("phoneNumber")

    logger.info("Phone number changed", user_id=user.id, phone_number=new_phone)
    return user


def seed_admin(repo: UserRepository, phone_number: Optional[str], password: Optional[str]) -> Optional[User]:
    """
    Create the configured admin account unless it already exists.

    The phone is normalized like a registration. Invalid settings are logged
    and nothing is created.
    """
    phone_number = normalize_phone_number(phone_number)
    errors = validate_phone_number(phone_number, field="ADMIN_PHONE_NUMBER")
    errors += validate_password(password)
    if errors:
        logger.error("Admin account not seeded", errors=[e.message for e in errors])
        return None

    if repo.get_by_phone_number(phone_number) is not None:
        return None

    user = repo.create({
        "name": "Admin",
        "phone_number": phone_number,
        "password_hash": hash_password(password),
        "role": ROLE_ADMIN,
    })
    logger.info("Default admin user created", user_id=user.id)
    return user

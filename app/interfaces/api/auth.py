"""Auth API routes — register, login, profile and saved properties."""

from fastapi import APIRouter, Depends, Response, status

from app.config import get_settings
from app.application.services.auth_service import (
    authenticate_user,
    change_phone_number,
    create_access_token,
    get_user,
    register_user,
    update_profile,
)
from app.application.services.saved_property_service import (
    list_saved_properties,
    toggle_saved_property,
)
from app.domain.identity import Identity
from app.domain.models.user import User
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.repositories.user_repository import UserRepository
from app.domain.schemas.auth import (
    AuthResponse,
    ChangePhoneRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserRead,
)
from app.domain.schemas.property import PropertyRead
from app.interfaces.api.deps import get_current_identity
from app.interfaces.deps import get_property_repository, get_user_repository

settings = get_settings()
router = APIRouter(prefix="/api/auth", tags=["Auth"])

TOKEN_COOKIE = "token"


def _token_response(user: User, response: Response) -> AuthResponse:
    """Issue a token and mirror it into an httpOnly cookie."""
    token = create_access_token(user)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.JWT_COOKIE_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
    )
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
):
    user = register_user(repo, body)
    return _token_response(user, response)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repository),
):
    user = authenticate_user(repo, body)
    return _token_response(user, response)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE)
    return {"success": True, "data": {}}


@router.get("/me")
def get_me(
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repository),
):
    return {"success": True, "data": UserRead.model_validate(get_user(repo, identity))}


@router.put("/me")
def update_me(
    body: UpdateProfileRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repository),
):
    user = update_profile(repo, identity, body)
    return {"success": True, "data": UserRead.model_validate(user)}


@router.put("/change-phone", response_model=AuthResponse)
def change_phone(
    body: ChangePhoneRequest,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repository),
):
    # The token embeds the phone number, so a fresh one is issued
    user = change_phone_number(repo, identity, body)
    return _token_response(user, response)


@router.post("/save-property/{property_id}")
def save_property(
    property_id: int,
    identity: Identity = Depends(get_current_identity),
    users: UserRepository = Depends(get_user_repository),
    properties: PropertyRepository = Depends(get_property_repository),
):
    result = toggle_saved_property(users, properties, identity, property_id)
    return {
        "success": True,
        "action": result["action"],
        "data": {"savedProperties": result["saved_properties"]},
    }


@router.get("/saved-properties")
def saved_properties(
    identity: Identity = Depends(get_current_identity),
    users: UserRepository = Depends(get_user_repository),
):
    items = [PropertyRead.model_validate(p) for p in list_saved_properties(users, identity)]
    return {"success": True, "count": len(items), "data": items}

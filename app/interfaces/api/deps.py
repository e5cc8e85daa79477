"""FastAPI dependency — bearer token authentication and role guards."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.application.services.auth_service import identity_from_token
from app.core.exceptions import UnauthorizedException
from app.domain.identity import Identity
from app.domain.policies import has_role

security = HTTPBearer(auto_error=False)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """Decode the bearer token. Signature and expiry only, no database lookup."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Not authorized, no token")
    return identity_from_token(credentials.credentials)


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Identity]:
    """Identity when a token is sent, None otherwise. A bad token is still rejected."""
    if credentials is None or not credentials.credentials:
        return None
    return identity_from_token(credentials.credentials)


def require_roles(*roles: str):
    """Guard a route to the given roles."""

    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        has_role(identity, roles).enforce()
        return identity

    return dependency

"""Authenticated identity decoded from a bearer token."""

from dataclasses import dataclass

from app.domain.models.user import ROLE_ADMIN, ROLE_AGENT


@dataclass(frozen=True)
class Identity:
    id: int
    role: str
    phone_number: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_agent(self) -> bool:
        return self.role == ROLE_AGENT

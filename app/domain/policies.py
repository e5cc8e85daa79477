"""
Authorization policies.

Each check answers with a ``Decision`` for an authenticated identity; the
caller decides what to do with a denial.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from app.core.exceptions import ForbiddenException
from app.domain.identity import Identity
from app.domain.models.enquiry import Enquiry
from app.domain.models.property import Property


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(False, reason)

    def enforce(self) -> None:
        if not self.allowed:
            raise ForbiddenException(self.reason or "Forbidden")


def has_role(identity: Identity, roles: Iterable[str]) -> Decision:
    roles = tuple(roles)
    if identity.role in roles:
        return Decision.allow()
    return Decision.deny(f"User role {identity.role} is not authorized to access this route")


def _is_sender(identity: Identity, enquiry: Enquiry) -> bool:
    return enquiry.sender_id == identity.id


def _is_recipient(identity: Identity, enquiry: Enquiry) -> bool:
    return enquiry.recipient_agent_id == identity.id


def can_view_enquiry(identity: Identity, enquiry: Enquiry) -> Decision:
    if _is_sender(identity, enquiry) or _is_recipient(identity, enquiry) or identity.is_admin:
        return Decision.allow()
    return Decision.deny("Not authorized to view this enquiry")


def can_append_to_enquiry(identity: Identity, enquiry: Enquiry) -> Decision:
    if _is_sender(identity, enquiry) or _is_recipient(identity, enquiry) or identity.is_admin:
        return Decision.allow()
    return Decision.deny("Not authorized to add messages to this enquiry")


def can_mark_enquiry_read(identity: Identity, enquiry: Enquiry) -> Decision:
    if _is_recipient(identity, enquiry):
        return Decision.allow()
    return Decision.deny("Only the recipient agent can mark this enquiry as read")


def can_delete_enquiry(identity: Identity, enquiry: Enquiry) -> Decision:
    if _is_sender(identity, enquiry) or _is_recipient(identity, enquiry) or identity.is_admin:
        return Decision.allow()
    return Decision.deny("Not authorized to delete this enquiry")


def can_modify_property(identity: Identity, prop: Property) -> Decision:
    if identity.is_admin or (prop.agent_id is not None and prop.agent_id == identity.id):
        return Decision.allow()
    return Decision.deny("Not authorized to modify this property")

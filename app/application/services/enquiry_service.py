"""
Enquiry service — buyer to agent contact threads.

Status moves ``sent -> read -> replied`` and never back. Deleting is per
side: the sender and the recipient agent each hide the thread for
themselves, and the other party keeps it. An admin delete hides it for both.
"""

from datetime import datetime, timezone
from typing import List

import structlog

from app.core.exceptions import EntityNotFoundException, ValidationException
from app.domain.identity import Identity
from app.domain.models.enquiry import (
    STATUS_RANK,
    STATUS_READ,
    STATUS_REPLIED,
    STATUS_SENT,
    Enquiry,
    EnquiryMessage,
)
from app.domain.policies import (
    can_append_to_enquiry,
    can_delete_enquiry,
    can_mark_enquiry_read,
    can_view_enquiry,
    has_role,
)
from app.domain.models.user import ROLE_AGENT
from app.domain.repositories.enquiry_repository import EnquiryRepository
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.schemas.enquiry import EnquiryCreate, MessageCreate
from app.domain.validation import FieldError, raise_for_errors, validate_message

logger = structlog.get_logger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def advance_status(enquiry: Enquiry, target: str) -> bool:
    """Move to ``target`` if it is ahead of the current status. Returns whether it moved."""
    if STATUS_RANK[target] <= STATUS_RANK[enquiry.status]:
        return False
    enquiry.status = target
    if target == STATUS_READ:
        enquiry.read_at = _now()
    return True


def _hidden_from(identity: Identity, enquiry: Enquiry) -> bool:
    """Whether this caller already deleted the enquiry on their side."""
    is_sender = enquiry.sender_id == identity.id
    is_recipient = enquiry.recipient_agent_id == identity.id
    if is_sender or is_recipient:
        return (
            (is_sender and enquiry.deleted_for_sender_at is not None)
            or (is_recipient and enquiry.deleted_for_agent_at is not None)
        )
    # Admins lose sight of it only once both sides are gone
    return enquiry.deleted_for_sender_at is not None and enquiry.deleted_for_agent_at is not None


def _load(repo: EnquiryRepository, identity: Identity, enquiry_id: int) -> Enquiry:
    enquiry = repo.get_by_id(enquiry_id)
    if enquiry is None or _hidden_from(identity, enquiry):
        raise EntityNotFoundException("Enquiry not found")
    return enquiry


def create_enquiry(
    enquiries: EnquiryRepository,
    properties: PropertyRepository,
    identity: Identity,
    body: EnquiryCreate,
) -> Enquiry:
    errors = validate_message(body.message)
    if body.property_id is None:
        errors.insert(0, FieldError("propertyId", "Property ID is required"))
    raise_for_errors(errors)

    prop = properties.get_by_id(body.property_id)
    if prop is None:
        raise EntityNotFoundException("Property not found")
    if prop.agent_id is None:
        raise ValidationException("This property has no agent to receive enquiries")

    message = body.message.strip()
    enquiry = enquiries.create({
        "property_id": prop.id,
        "sender_id": identity.id,
        "recipient_agent_id": prop.agent_id,
        "message": message,
        "status": STATUS_SENT,
        "conversation": [EnquiryMessage(sender_id=identity.id, message=message)],
    })

    logger.info(
        "Enquiry created",
        enquiry_id=enquiry.id,
        property_id=prop.id,
        sender_id=identity.id,
        recipient_agent_id=enquiry.recipient_agent_id,
    )
    return enquiry


def list_sent_enquiries(repo: EnquiryRepository, identity: Identity) -> List[Enquiry]:
    return repo.list_by_sender(identity.id)


def list_received_enquiries(repo: EnquiryRepository, identity: Identity) -> List[Enquiry]:
    has_role(identity, [ROLE_AGENT]).enforce()
    return repo.list_by_recipient(identity.id)


def get_enquiry(repo: EnquiryRepository, identity: Identity, enquiry_id: int) -> Enquiry:
    enquiry = _load(repo, identity, enquiry_id)
    can_view_enquiry(identity, enquiry).enforce()
    return enquiry


def mark_as_read(repo: EnquiryRepository, identity: Identity, enquiry_id: int) -> Enquiry:
    enquiry = _load(repo, identity, enquiry_id)
    can_mark_enquiry_read(identity, enquiry).enforce()

    if advance_status(enquiry, STATUS_READ):
        enquiry = repo.save(enquiry)
        logger.info("Enquiry marked as read", enquiry_id=enquiry.id)
    return enquiry


def append_message(
    repo: EnquiryRepository,
    identity: Identity,
    enquiry_id: int,
    body: MessageCreate,
) -> Enquiry:
    enquiry = _load(repo, identity, enquiry_id)
    can_append_to_enquiry(identity, enquiry).enforce()
    raise_for_errors(validate_message(body.message))

    if identity.id == enquiry.recipient_agent_id:
        advance_status(enquiry, STATUS_REPLIED)
        enquiry.replied_at = _now()

    repo.add_message(enquiry, identity.id, body.message.strip())
    logger.info("Enquiry message added", enquiry_id=enquiry.id, sender_id=identity.id, status=enquiry.status)
    return enquiry


def delete_enquiry(repo: EnquiryRepository, identity: Identity, enquiry_id: int) -> None:
    enquiry = _load(repo, identity, enquiry_id)
    can_delete_enquiry(identity, enquiry).enforce()

    now = _now()
    is_sender = enquiry.sender_id == identity.id
    is_recipient = enquiry.recipient_agent_id == identity.id
    if is_sender or not is_recipient:
        enquiry.deleted_for_sender_at = enquiry.deleted_for_sender_at or now
    if is_recipient or not is_sender:
        enquiry.deleted_for_agent_at = enquiry.deleted_for_agent_at or now
    repo.save(enquiry)
    logger.info(
        "Enquiry deleted",
        enquiry_id=enquiry.id,
        by=identity.id,
        for_sender=enquiry.deleted_for_sender_at is not None,
        for_agent=enquiry.deleted_for_agent_at is not None,
    )

"""Enquiries API routes — contact threads between buyers and agents."""

from fastapi import APIRouter, Depends, status

from app.application.services.enquiry_service import (
    append_message,
    create_enquiry,
    delete_enquiry,
    get_enquiry,
    list_received_enquiries,
    list_sent_enquiries,
    mark_as_read,
)
from app.domain.identity import Identity
from app.domain.models.user import ROLE_AGENT
from app.domain.repositories.enquiry_repository import EnquiryRepository
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.schemas.enquiry import EnquiryCreate, EnquiryRead, MessageCreate
from app.interfaces.api.deps import get_current_identity, require_roles
from app.interfaces.deps import get_enquiry_repository, get_property_repository

router = APIRouter(prefix="/api/enquiries", tags=["Enquiries"])


def _many(enquiries) -> dict:
    items = [EnquiryRead.model_validate(e) for e in enquiries]
    return {"success": True, "count": len(items), "data": items}


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    body: EnquiryCreate,
    identity: Identity = Depends(get_current_identity),
    enquiries: EnquiryRepository = Depends(get_enquiry_repository),
    properties: PropertyRepository = Depends(get_property_repository),
):
    enquiry = create_enquiry(enquiries, properties, identity, body)
    return {
        "success": True,
        "message": "Enquiry sent successfully",
        "data": EnquiryRead.model_validate(enquiry),
    }


@router.get("/my-sent")
def my_sent(
    identity: Identity = Depends(get_current_identity),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
):
    return _many(list_sent_enquiries(repo, identity))


@router.get("/my-received")
def my_received(
    identity: Identity = Depends(require_roles(ROLE_AGENT)),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
):
    return _many(list_received_enquiries(repo, identity))


@router.get("/{enquiry_id}")
def get_one(
    enquiry_id: int,
    identity: Identity = Depends(get_current_identity),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
):
    return {"success": True, "data": EnquiryRead.model_validate(get_enquiry(repo, identity, enquiry_id))}


@router.patch("/{enquiry_id}/read")
def mark_read(
    enquiry_id: int,
    identity: Identity = Depends(get_current_identity),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
):
    enquiry = mark_as_read(repo, identity, enquiry_id)
    return {"success": True, "data": EnquiryRead.model_validate(enquiry)}


@router.post("/{enquiry_id}/messages")
def add_message(
    enquiry_id: int,
    body: MessageCreate,
    identity: Identity = Depends(get_current_identity),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
):
    enquiry = append_message(repo, identity, enquiry_id, body)
    return {
        "success": True,
        "message": "Message added to conversation",
        "data": EnquiryRead.model_validate(enquiry),
    }


@router.delete("/{enquiry_id}")
def delete(
    enquiry_id: int,
    identity: Identity = Depends(get_current_identity),
    repo: EnquiryRepository = Depends(get_enquiry_repository),
):
    delete_enquiry(repo, identity, enquiry_id)
    return {"success": True, "data": {}}

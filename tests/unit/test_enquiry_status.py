"""Unit tests for the enquiry status machine."""

import pytest

from app.application.services.enquiry_service import advance_status
from app.domain.models.enquiry import Enquiry


def make_enquiry(status):
    return Enquiry(sender_id=1, recipient_agent_id=2, message="Hi", status=status)


@pytest.mark.unit
def test_sent_to_read_stamps_read_at():
    enquiry = make_enquiry("sent")

    assert advance_status(enquiry, "read") is True
    assert enquiry.status == "read"
    assert enquiry.read_at is not None


@pytest.mark.unit
def test_sent_can_jump_to_replied():
    enquiry = make_enquiry("sent")

    assert advance_status(enquiry, "replied") is True
    assert enquiry.status == "replied"


@pytest.mark.unit
@pytest.mark.parametrize("current, target", [
    ("read", "read"),
    ("read", "sent"),
    ("replied", "read"),
    ("replied", "sent"),
    ("replied", "replied"),
])
def test_status_never_moves_back(current, target):
    enquiry = make_enquiry(current)

    assert advance_status(enquiry, target) is False
    assert enquiry.status == current

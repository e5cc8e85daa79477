"""Saved-listings service — the user's favorites set."""

from typing import List

import structlog

from app.domain.identity import Identity
from app.domain.models.property import Property
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.repositories.user_repository import UserRepository
from app.application.services.property_service import get_property

logger = structlog.get_logger(__name__)

ACTION_SAVED = "saved"
ACTION_UNSAVED = "unsaved"


def toggle_saved_property(
    users: UserRepository,
    properties: PropertyRepository,
    identity: Identity,
    property_id: int,
) -> dict:
    """
    Flip membership of one property in the user's favorites.

    Removal is tried first; only when nothing was removed is the property
    added. Both steps are single statements, so two concurrent toggles can
    never leave a duplicate entry.
    """
    get_property(properties, property_id)

    if users.remove_saved_property(identity.id, property_id):
        action = ACTION_UNSAVED
    else:
        users.add_saved_property(identity.id, property_id)
        action = ACTION_SAVED

    logger.info("Saved property toggled", user_id=identity.id, property_id=property_id, action=action)
    return {
        "action": action,
        "saved_properties": users.list_saved_property_ids(identity.id),
    }


def list_saved_properties(users: UserRepository, identity: Identity) -> List[Property]:
    return users.list_saved_properties(identity.id)

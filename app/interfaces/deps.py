"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.services.media_service import MediaStorage
from app.domain.models.enquiry import Enquiry
from app.domain.models.property import Property
from app.domain.models.user import User
from app.domain.repositories.enquiry_repository import EnquiryRepository
from app.domain.repositories.property_repository import PropertyRepository
from app.domain.repositories.user_repository import UserRepository
from app.infrastructure.cloudinary_client import CloudinaryClient
from app.infrastructure.database import get_db
from app.infrastructure.geocoder import NominatimGeocoder
from app.infrastructure.repositories.enquiry_repository import SQLAlchemyEnquiryRepository
from app.infrastructure.repositories.property_repository import SQLAlchemyPropertyRepository
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_property_repository(db: Session = Depends(get_db)) -> PropertyRepository:
    """Get property repository instance."""
    return SQLAlchemyPropertyRepository(db, Property)


def get_enquiry_repository(db: Session = Depends(get_db)) -> EnquiryRepository:
    """Get enquiry repository instance."""
    return SQLAlchemyEnquiryRepository(db, Enquiry)


def get_media_storage() -> MediaStorage:
    return CloudinaryClient()


def get_geocoder() -> NominatimGeocoder:
    return NominatimGeocoder()

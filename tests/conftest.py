"""Shared pytest fixtures and configuration."""

import os

# Set test environment variables before the app reads its settings
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("MAX_UPLOAD_BYTES", "1024")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "demo-cloud")
os.environ.setdefault("CLOUDINARY_API_KEY", "123456")
os.environ.setdefault("CLOUDINARY_API_SECRET", "shh")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.application.services.auth_service import create_access_token, hash_password
from app.domain.models.property import Property
from app.domain.models.user import User
from app.domain.schemas.media import UploadedImage
from app.infrastructure.database import Base, get_db
from app.interfaces.deps import get_media_storage

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "secret1"


class FakeMediaStorage:
    """Stands in for Cloudinary; records what it was asked to store."""

    def __init__(self):
        self.uploads = []
        self.error = None

    async def upload_image(self, content: bytes, filename: str, content_type: str) -> UploadedImage:
        if self.error is not None:
            raise self.error
        self.uploads.append((content, filename, content_type))
        n = len(self.uploads)
        return UploadedImage(
            url=f"https://res.cloudinary.com/demo-cloud/image/upload/soudou_properties/img{n}.jpg",
            provider_id=f"soudou_properties/img{n}",
        )


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_storage():
    return FakeMediaStorage()


@pytest.fixture
def client(db, fake_storage):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_storage] = lambda: fake_storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Factory for stored users."""
    counter = {"n": 0}

    def _make(role: str = "user", phone_number: str = None, name: str = None,
              email: str = None, password: str = DEFAULT_PASSWORD) -> User:
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            phone_number=phone_number or f"2246000000{counter['n']:02d}",
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_property(db):
    """Factory for stored listings."""

    def _make(agent: User = None, **overrides) -> Property:
        values = {
            "title": "Villa in Kipé",
            "description": "Four bedroom villa with garden",
            "price": 2500000000,
            "currency": "GNF",
            "property_type": "House",
            "listing_type": "For Sale",
            "bedrooms": 4,
            "bathrooms": 2,
            "living_rooms": 1,
            "contact_name": "Kipé Immobilier",
            "location": "Kipé, Conakry",
            "photos": [],
            "agent_id": agent.id if agent else None,
        }
        values.update(overrides)
        prop = Property(**values)
        db.add(prop)
        db.commit()
        db.refresh(prop)
        return prop

    return _make


@pytest.fixture
def auth_headers():
    """Bearer header for a stored user."""

    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


@pytest.fixture
def sample_property_payload():
    return {
        "title": "Apartment near Kaloum port",
        "description": "Two bedroom apartment, sea view",
        "price": 4500000,
        "propertyType": "Apartment",
        "listingType": "For Rent",
        "bedrooms": 2,
        "bathrooms": 1,
        "contactName": "Amara",
        "location": "Kaloum, Conakry",
        "coordinates": {"type": "Point", "coordinates": [-13.7122, 9.5092]},
        "photos": ["https://res.cloudinary.com/demo-cloud/image/upload/a.jpg"],
    }

"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import register_exception_handlers

# Import all models so SQLAlchemy knows about them
from app.domain.models.user import User
from app.domain.models.property import Property
from app.domain.models.enquiry import Enquiry, EnquiryMessage

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.properties import router as properties_router
from app.interfaces.api.enquiries import router as enquiries_router
from app.interfaces.api.uploads import router as uploads_router
from app.interfaces.api.geocoding import router as geocoding_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)


def ensure_admin() -> None:
    """Create the configured admin account if it does not exist yet."""
    if not (settings.ADMIN_PHONE_NUMBER and settings.ADMIN_PASSWORD):
        return

    from app.application.services.auth_service import seed_admin
    from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

    db = SessionLocal()
    try:
        repo = SQLAlchemyUserRepository(db, User)
        seed_admin(repo, settings.ADMIN_PHONE_NUMBER, settings.ADMIN_PASSWORD)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Soudou API...", env=settings.ENVIRONMENT)

    # Create DB tables (use migrations for a shared database)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")
    ensure_admin()

    yield

    logger.info("Soudou API stopped")


app = FastAPI(
    title="Soudou — Real-estate classifieds API",
    description="Listings, favorites, enquiries and image uploads for the Soudou mobile app",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(properties_router)
app.include_router(enquiries_router)
app.include_router(uploads_router)
app.include_router(geocoding_router)


@app.get("/")
def root():
    return {
        "name": "Soudou API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}

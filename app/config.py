"""Soudou Backend — Configuration via pydantic-settings."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./data/soudou.db"

    # Security
    SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60 * 24 * 30
    JWT_COOKIE_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12

    # Seeded at startup when both are set
    ADMIN_PHONE_NUMBER: str = ""
    ADMIN_PASSWORD: str = ""

    # Listings
    DEFAULT_CURRENCY: str = "GNF"  # Guinean franc
    PROPERTY_LIST_DEFAULT_LIMIT: int = 100
    PROPERTY_LIST_MAX_LIMIT: int = 500

    # Cloudinary (image hosting)
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "soudou_properties"
    CLOUDINARY_TIMEOUT_SECONDS: float = 60
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Geocoding (OpenStreetMap Nominatim)
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org"
    NOMINATIM_EMAIL: str = ""
    NOMINATIM_USER_AGENT: str = "SoudouBackend/1.0"

    # HTTP
    CORS_ORIGINS: list[str] = ["*"]

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

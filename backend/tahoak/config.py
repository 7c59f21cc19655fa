"""Centralized application settings loaded from environment variables."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./tahoak_directory.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Public site base URL used in emailed links
    PUBLIC_BASE_URL: str = "http://localhost:3000"

    # Locales
    SUPPORTED_LOCALES: List[str] = ["en", "es"]
    DEFAULT_LOCALE: str = "en"

    # Image upload
    UPLOAD_DIR: str = "uploads"
    MAX_IMAGE_SIZE: int = 5 * 1024 * 1024  # 5 MB
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/png", "image/webp"]

    # Magic links (subscription / claim verification)
    MAGIC_LINK_TTL_DAYS: int = 7

    # Email (Resend HTTP API). Without an API key sends are logged only.
    RESEND_API_KEY: str = ""
    RESEND_API_URL: str = "https://api.resend.com/emails"
    MAIL_FROM: str = "noreply@tahoak.skibri.us"
    EMAIL_TIMEOUT_SECONDS: float = 10.0

    # Geocoding (OpenStreetMap Nominatim)
    GEOCODER_URL: str = "https://nominatim.openstreetmap.org"
    GEOCODER_USER_AGENT: str = "TahOakParkCollective/1.0 (contact@tahoak.skibri.us)"
    GEOCODER_CITY_SUFFIX: str = ", Sacramento, CA"
    GEOCODER_TIMEOUT_SECONDS: float = 10.0

    # Spot checks
    SPOT_CHECK_STALE_DAYS: int = 182
    SPOT_CHECK_SIZE: int = 5
    SPOT_CHECK_STALE_LIMIT: int = 3

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()

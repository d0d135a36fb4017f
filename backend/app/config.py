"""
Application Configuration
Uses pydantic-settings for environment variable management
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "ServiceHub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"

    # MongoDB
    MONGO_URL: str = "mongodb://localhost:27017"
    DB_NAME: str = "servicehub"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # Media uploads
    MEDIA_UPLOAD_URL: Optional[str] = None  # Remote media host; local disk when unset
    MEDIA_API_KEY: Optional[str] = None
    MEDIA_UPLOAD_DIR: str = "uploads/media"
    MEDIA_BASE_URL: str = "http://localhost:8000/media"
    MEDIA_MAX_BYTES: int = 4 * 1024 * 1024  # 4MB

    # Page revalidation
    REVALIDATE_WEBHOOK_URL: Optional[str] = None
    REVALIDATE_SECRET: Optional[str] = None

    def is_production(self) -> bool:
        """Check if running in production mode"""
        return not self.DEBUG

    def validate_production_settings(self) -> list[str]:
        """Validate that production-critical settings are configured"""
        errors = []
        if self.is_production():
            if "*" in self.CORS_ORIGINS:
                errors.append("CORS_ORIGINS should not be '*' in production")
            if self.REVALIDATE_WEBHOOK_URL and not self.REVALIDATE_SECRET:
                errors.append("REVALIDATE_SECRET must be set when REVALIDATE_WEBHOOK_URL is configured")
            if self.MEDIA_UPLOAD_URL and not self.MEDIA_API_KEY:
                errors.append("MEDIA_API_KEY must be set when MEDIA_UPLOAD_URL is configured")
        return errors


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

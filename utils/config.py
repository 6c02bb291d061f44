"""
Configuration Utility - Environment Variables Management

Centralized configuration loading from .env files using pydantic-settings.
Type-safe access to all environment variables with validation.

Usage:
    from utils.config import settings

    store_path = settings.USERS_STORE_PATH
    activity_url = settings.ACTIVITY_API_URL
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Record Store
    USERS_STORE_PATH: str = Field(default="users.txt")

    # Activity Service
    ACTIVITY_API_URL: str = Field(default="https://api.example.com/activity")
    # None disables the timeout entirely; a hung service stalls only its own request
    ACTIVITY_TIMEOUT: float | None = Field(default=None, gt=0)

    # Backend API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=3000)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="text")

    # Application Metadata
    ENVIRONMENT: str = Field(default="production")
    APP_NAME: str = Field(default="users-backend")
    APP_VERSION: str = Field(default="0.1.0")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()

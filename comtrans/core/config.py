"""
Application configuration using Pydantic Settings
"""
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""

    # App
    APP_NAME: str = "Community Translation Server"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = Field(...)

    # Redis (statistics cache)
    REDIS_URL: str = Field(default="redis://localhost:6379")
    STATS_CACHE_PREFIX: str = "stats"

    # Security
    SECRET_KEY: str = Field(...)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Translation import
    IMPORT_BATCH_SIZE: int = Field(default=50, ge=1)
    SYSTEM_USER_ID: int = 1  # created_by for imports without an acting user

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()

"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        app_name: Human readable API name
        app_version: API version reported by the root endpoint
        database_url: Database connection string (PostgreSQL or SQLite)
        secret_key: Secret key for JWT token encoding
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_minutes: Access token expiration time in minutes
        cors_origins: Origins allowed by the CORS middleware
        log_level: Root logging level
    """
    app_name: str = "MediPredict API"
    app_version: str = "1.0.0"

    # Database settings
    database_url: str = "sqlite:///./medipredict.db"

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # CORS settings
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()

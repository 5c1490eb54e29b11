"""Application configuration loaded from the environment"""

import logging
from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "dev-secret-key-123"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    app_name: str = "Church CRM API"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:5173,http://localhost:3000"
    frontend_url: str = "http://localhost:5173"

    # Database: either a full URL or the discrete fields below
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "ssdadb"

    # Security
    jwt_secret: str = DEFAULT_JWT_SECRET
    access_token_expire_minutes: int = 60 * 12  # 12 hours
    reset_token_expire_minutes: int = 30

    # Outreach drafting
    anthropic_api_key: Optional[str] = None
    outreach_model: str = "claude-3-5-haiku-latest"

    # Email (password reset links)
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    email_from: Optional[str] = None
    email_from_name: str = "Church CRM"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL for SQLAlchemy, built from the discrete fields when no URL is set"""
        if self.database_url:
            url = self.database_url
            # Heroku-style URLs use the legacy scheme
            if url.startswith("postgres://"):
                url = "postgresql+psycopg://" + url[len("postgres://"):]
            elif url.startswith("postgresql://"):
                url = "postgresql+psycopg://" + url[len("postgresql://"):]
            return url
        return (
            f"postgresql+psycopg://{quote_plus(self.db_user)}:{quote_plus(self.db_password)}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

    @property
    def allowed_origins(self) -> list:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def validate_production_settings(settings: Settings) -> list:
    """Validate that all required settings are configured for production"""
    errors = []

    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        errors.append("JWT_SECRET must be changed from default value")

    if not settings.database_url and settings.db_password == "postgres":
        errors.append("DB_PASSWORD is still the default value")

    if not settings.anthropic_api_key:
        errors.append("ANTHROPIC_API_KEY is not set; outreach drafts will use templates")

    if not (settings.smtp_host and settings.email_from):
        errors.append("SMTP_HOST/EMAIL_FROM not set; password reset links cannot be emailed")

    return errors


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    base_settings = Settings()

    if not base_settings.debug:
        for error in validate_production_settings(base_settings):
            logger.warning(f"Production config warning: {error}")

    return base_settings


# Convenience access
settings = get_settings()

# config/settings.py

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
import os
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EcoCheck"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", pattern="^(development|staging|production)$")

    # Upstream backend
    BACKEND_API_URL: str = "http://localhost:5000/api"
    REQUEST_TIMEOUT: float = Field(default=30.0, gt=0, le=300)

    # CORS
    CORS_ORIGINS: str = ""

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        if not self.CORS_ORIGINS:
            return ["*"] if self.DEBUG else []
        return [s.strip() for s in self.CORS_ORIGINS.split(",") if s.strip()]

    # Local key-value store
    CACHE_BACKEND: str = Field(default="redis", pattern="^(redis|memory)$")
    REDIS_URL: Optional[str] = "redis://localhost:6379/0"

    # Gamification
    CHALLENGE_CYCLE_SIZE: int = Field(default=10, ge=1, le=1000)

    # Report form
    CONTACT_COUNTRY_CODE: str = Field(default="+63", pattern=r"^\+\d{1,3}$")

    # Monitoring
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("BACKEND_API_URL")
    @classmethod
    def validate_backend_url(cls, v):
        """Validate backend URL format and drop the trailing slash"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("BACKEND_API_URL must be an http(s) URL")
        return v.rstrip("/")

    @field_validator("REDIS_URL")
    @classmethod
    def validate_redis_url(cls, v):
        """Validate Redis URL format"""
        if v and not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError("Invalid Redis URL format")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v):
        """Validate CORS origins in production"""
        environment = os.getenv("ENVIRONMENT", "development")
        if environment == "production" and ("*" in v or not v):
            raise ValueError("Wildcard CORS origins not allowed in production")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.ENVIRONMENT == "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()

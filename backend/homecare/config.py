from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    project_name: str = Field(default="Home Nursing API")
    api_version: str = Field(default="1.0.0")

    # Database
    database_url: str = Field(...)

    # Token signing. No default: the process must not start without it.
    jwt_secret_key: str = Field(..., min_length=1)
    token_expire_seconds: int = Field(default=3600, gt=0)

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

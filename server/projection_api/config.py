"""Application configuration loaded from environment variables."""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_prefix="PROJECTION_", env_file=".env", extra="ignore")

    # Remote analysis service
    analysis_api_url: str = "http://localhost:4000"
    analysis_api_token: Optional[str] = None
    analysis_timeout_seconds: float = 30.0
    health_databases: list[str] = ["NHANES", "WHO"]

    # Workflow sessions
    max_sessions: int = 500

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8083
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import PostgresDsn, RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: Literal["development", "production", "test"] = "development"
    app_url: str = "http://localhost:3000"
    app_name: str = "NewTube"

    # Database
    database_url: PostgresDsn
    db_echo: bool = False
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_statement_timeout_ms: int = 15000

    # Redis (rate limiting + reference data cache)
    redis_url: RedisDsn

    # Identity provider (Clerk)
    clerk_jwt_key: str = ""
    clerk_signing_secret: str = ""

    # Media pipeline (Mux)
    mux_token_id: str = ""
    mux_token_secret: str = ""
    mux_webhook_secret: str = ""

    # Object storage
    storage_api_url: str = "https://storage.example.com"
    storage_api_key: str = ""

    # Background workflow runner
    workflow_api_url: str = "https://qstash.upstash.io"
    workflow_token: str = ""
    workflow_callback_url: str = ""

    # Per-actor admission control
    rate_limit_requests: int = 10
    rate_limit_window_seconds: int = 10

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def database_url_async(self) -> str:
        """Get async database URL (postgresql+asyncpg)."""
        url = str(self.database_url)
        return url.replace("postgresql://", "postgresql+asyncpg://")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]

"""
Application settings loaded from environment variables / .env file.

All variables use the ``A11Y_`` prefix, e.g. ``A11Y_DATABASE_URL``.
"""
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration"""

    model_config = SettingsConfigDict(
        env_prefix="A11Y_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./a11y_reports.db"

    # Logging
    log_level: str = "INFO"

    # Redis (score snapshot cache)
    redis_host: str = "localhost"
    redis_port: int = 6379
    cache_redis_db: int = 2
    score_cache_enabled: bool = True
    score_cache_ttl_seconds: int = Field(3600, ge=1)  # 1h, like the last-scan score transient

    # Compliance classification
    default_threshold_table: Literal["engine", "display"] = "engine"


settings = Settings()

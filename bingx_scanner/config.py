"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # BingX API
    bingx_api_key: str = ""
    bingx_base_url: str = "https://open-api.bingx.com"
    request_timeout: float = Field(default=10.0, gt=0)

    # Retrieval
    top_n: int = Field(default=100, ge=1)
    max_retries: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=1.0, ge=0)
    concurrent_fetch: bool = False

    # Analysis
    quote_suffixes: list[str] = ["USDT"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "CoinDash Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # SQLite (favorites persistence)
    sqlite_path: Optional[str] = None  # Defaults to ./data/coindash.db

    # Redis
    redis_url: str = "redis://localhost:6379"

    # CORS (Frontend URL)
    frontend_url: str = "http://localhost:3000"
    allowed_origins: list[str] = ["http://localhost:3000"]

    # CoinGecko
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_api_key: Optional[str] = None  # Demo key, sent as x-cg-demo-api-key
    vs_currency: str = "usd"
    markets_per_page: int = 100
    http_timeout_seconds: float = 15.0

    # Cache TTLs (seconds)
    assets_cache_ttl: int = 3600
    markets_cache_ttl: int = 120
    history_cache_ttl: int = 300
    memory_cache_max_entries: int = 512

    # Indicator windows
    sma_fast_window: int = 20
    sma_slow_window: int = 50
    rsi_window: int = 14
    range_lookback: int = 90

    # Dashboard defaults
    default_asset: str = "bitcoin"
    default_period: str = "365"
    default_theme: str = "dark"

    # LLM Providers
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    llm_primary_provider: str = "gemini"  # Options: gemini, openai
    llm_gemini_model: str = "gemini-2.5-flash"
    llm_openai_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.4
    llm_max_tokens: int = 1024

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

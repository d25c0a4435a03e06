"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ip_info_url: str = "https://cufo.cc"
    product_api_base: str = "https://gateway.ddot.cc/api/digfrog/product"
    default_sku: str = "100209267857"
    cache_dir: Path = Path.home() / ".pulse-dashboard" / "cache"
    persist_cache: bool = True
    cache_ttl_seconds: int = 86400
    http_timeout_seconds: float = 15
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

"""Storefront Gateway Configuration"""

from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront Gateway"
    environment: Literal["development", "production"] = "development"
    host: str = "0.0.0.0"
    port: int = 3000

    # WooCommerce (required)
    woocommerce_api_url: str
    woocommerce_consumer_key: str
    woocommerce_consumer_secret: str
    woocommerce_store_url: str

    # WordPress content API (public)
    wordpress_api_url: str = "https://grapeceramics.se/wp-json/wp/v2/"

    # Comma separated list of allowed origins
    cors_origin: Optional[str] = None

    # Upstream behaviour
    cache_ttl_seconds: int = 300
    http_timeout_seconds: float = 30.0

    # Cache preload
    preload_enabled: bool = True
    preload_interval_seconds: int = 240
    preload_page_slugs: str = "sidfot,startsida"

    # Rate limiting
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    @property
    def debug(self) -> bool:
        return self.environment == "development"

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins, falling back to the local dev servers"""
        if self.cors_origin:
            return [o.strip() for o in self.cors_origin.split(",") if o.strip()]
        return ["http://localhost:5173", "http://localhost:3000"]

    @property
    def page_slugs(self) -> list[str]:
        return [s.strip() for s in self.preload_page_slugs.split(",") if s.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

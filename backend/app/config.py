"""
Application configuration using pydantic-settings.

All configuration values can be set via environment variables or .env file.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables.
    Prefix: none (use exact names)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===========================================
    # Application
    # ===========================================
    app_name: str = "Solaria Admin API"
    app_version: str = "1.0.0"
    app_description: str = "Admin service for customers, transactions and factura generation"
    debug: bool = False
    log_level: str = "INFO"

    # ===========================================
    # CORS
    # ===========================================
    cors_origins: list[str] = Field(default=["*"])
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # ===========================================
    # Rate Limiting
    # ===========================================
    rate_limit_factura: str = "10/minute"
    rate_limit_listing: str = "60/minute"

    # ===========================================
    # Factura API (external backend)
    # ===========================================
    factura_api_base: str = "http://127.0.0.1:4003"
    # None keeps the HTTP client default (no timeout)
    factura_api_timeout: Optional[float] = None
    factura_api_token: Optional[str] = None

    # ===========================================
    # Admin UI defaults
    # ===========================================
    items_per_page: int = 5
    default_country_code: str = "+506"

    # ===========================================
    # Admin identity (Firebase)
    # ===========================================
    admin_email: Optional[str] = None
    firebase_enabled: bool = False
    firebase_project_id: Optional[str] = None
    firebase_credentials_path: Optional[str] = None

    # ===========================================
    # Logging Configuration
    # ===========================================
    enable_cloud_logging: bool = False
    enable_request_logging: bool = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for performance.
    To reload settings (e.g., in tests), clear the cache:
        get_settings.cache_clear()
    """
    return Settings()


# Convenience function to get settings
settings = get_settings()

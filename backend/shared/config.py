"""
Centralized configuration for the DigitalPro backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., STRIPE_*, SUPABASE_*, SESSION_*).
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "DigitalPro API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Storage: "supabase" for deployments, "memory" for local development and tests
    storage_backend: Literal["supabase", "memory"] = "supabase"

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    # Direct Postgres connection (migrations only)
    database_url: str = ""

    # Sessions
    session_cookie_name: str = "digitalpro_session"
    session_ttl_days: int = 7
    session_cookie_secure: bool = False
    session_cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    # Product files
    uploads_dir: Path = Path("uploads")
    max_upload_bytes: int = 100 * 1024 * 1024
    download_chunk_size: int = 64 * 1024
    archive_extension: str = ".zip"

    # Stripe (payment confirmation webhook)
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""

    # Client-reported payment confirmation (POST /api/orders, /api/mark-paid).
    # Deployments that receive Stripe webhooks should turn this off.
    allow_client_payment_confirmation: bool = True

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:5173"

    # OAuth sign-in. A provider is offered only when its id and secret are set.
    google_client_id: str = ""
    google_client_secret: str = ""
    github_client_id: str = ""
    github_client_secret: str = ""
    # Public base URL of this API, used to build OAuth callback URLs.
    # Empty means "derive from the incoming request".
    public_api_url: str = ""
    oauth_state_cookie_name: str = "digitalpro_oauth_state"
    oauth_state_ttl_seconds: int = 600


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

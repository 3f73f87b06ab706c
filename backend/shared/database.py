"""
Supabase client for the storage_backend="supabase" repositories.

The backend connects with the service-role key only. Row-level security is
not relied on: sessions and entitlements are checked in the service layer
before any repository is touched.
"""

from typing import Optional

from supabase import Client, create_client

from .config import get_settings
from .exceptions import StorageError

_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the process-wide service-role client, creating it on first use.

    Raises:
        StorageError: SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not set
    """
    global _client

    if _client is not None:
        return _client

    settings = get_settings()
    missing = [
        name
        for name, value in (
            ("SUPABASE_URL", settings.supabase_url),
            ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
        )
        if not value
    ]
    if missing:
        raise StorageError(
            f"Supabase is not configured; set {', '.join(missing)} "
            "or use STORAGE_BACKEND=memory",
            code="STORAGE_NOT_CONFIGURED",
            details={"missing": missing},
        )

    _client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    return _client


def reset_client_cache() -> None:
    """Forget the cached client so the next call reads settings again."""
    global _client
    _client = None

"""
Base repository class for database access.

Provides a common abstraction layer for all Supabase repositories,
encapsulating client access and shared utilities for row mapping.
"""

from datetime import datetime
from typing import TypeVar, Generic, Any, Optional
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProductRepository(BaseRepository[Product]):
            def get_product(self, product_id: str) -> Optional[Product]:
                result = self._db.table("products").select("*").eq("id", product_id).execute()
                if not result.data:
                    return None
                return self._map_to_product(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a timestamp column returned by PostgREST.

    PostgREST serializes timestamptz as ISO-8601 strings, sometimes with a
    trailing "Z". Datetimes and None pass through unchanged.
    """
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))

"""
Download audit repositories.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from shared.repository import BaseRepository, parse_timestamp
from .models import Download


class DownloadRepository(BaseRepository[Download]):
    """Repository for the append-only `downloads` table."""

    def create(self, user_id: str, product_id: str, download_url: str) -> Download:
        result = (
            self._db.table("downloads")
            .insert(
                {
                    "user_id": user_id,
                    "product_id": product_id,
                    "download_url": download_url,
                }
            )
            .execute()
        )
        return self._map_to_download(result.data[0])

    def list_for_user(self, user_id: str) -> list[Download]:
        result = (
            self._db.table("downloads")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_download(row) for row in result.data or []]

    def _map_to_download(self, data: dict[str, Any]) -> Download:
        return Download(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            product_id=str(data["product_id"]),
            download_url=data.get("download_url") or "",
            created_at=parse_timestamp(data["created_at"]),
        )


class InMemoryDownloadRepository:
    """In-memory download audit trail for testing and development."""

    def __init__(self) -> None:
        self._downloads: list[Download] = []

    def create(self, user_id: str, product_id: str, download_url: str) -> Download:
        download = Download(
            id=str(uuid.uuid4()),
            user_id=user_id,
            product_id=product_id,
            download_url=download_url,
            created_at=datetime.now(timezone.utc),
        )
        self._downloads.append(download)
        return download

    def list_for_user(self, user_id: str) -> list[Download]:
        return [d for d in reversed(self._downloads) if d.user_id == user_id]

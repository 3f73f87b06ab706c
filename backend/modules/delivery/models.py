"""
Delivery module data models.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator
from urllib.parse import quote

from pydantic import BaseModel, Field

ZIP_MEDIA_TYPE = "application/zip"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class Download(BaseModel):
    """
    One row of the download audit trail.

    Append-only: written after a successful stream, never updated.
    """

    id: str
    user_id: str
    product_id: str
    download_url: str = Field(..., description="The endpoint the file was served from")
    created_at: datetime


@dataclass
class FileDelivery:
    """
    A file ready to be streamed to the caller.

    `chunks` must be consumed at most once. Closing it early (client
    disconnect) releases the file handle and skips the audit row.
    """

    filename: str
    media_type: str
    size: int
    chunks: AsyncIterator[bytes]

    @property
    def content_disposition(self) -> str:
        """Attachment header, with an RFC 5987 form for non-ASCII names."""
        plain = _CONTROL_CHARS.sub("_", self.filename).replace("\\", "_").replace('"', "'")
        if plain.isascii():
            return f'attachment; filename="{plain}"'
        fallback = plain.encode("ascii", "replace").decode("ascii").replace("?", "_")
        return f"attachment; filename=\"{fallback}\"; filename*=utf-8''{quote(plain)}"

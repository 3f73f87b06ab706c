"""
Delivery module interfaces.
"""

from typing import Protocol, AsyncIterable, AsyncIterator, runtime_checkable

from .models import Download, FileDelivery


@runtime_checkable
class IFileStore(Protocol):
    """Backing store for product archives."""

    async def exists(self, name: str) -> bool:
        ...

    async def size(self, name: str) -> int:
        ...

    def stream(self, name: str, chunk_size: int) -> AsyncIterator[bytes]:
        """Chunked read. Stops reading when the consumer stops iterating."""
        ...

    async def save(
        self,
        chunks: AsyncIterable[bytes],
        suffix: str,
        max_bytes: int,
    ) -> tuple[str, int]:
        """Write an upload under a new unique name. Returns (name, size)."""
        ...


@runtime_checkable
class IDownloadRepository(Protocol):
    """Append-only store for download audit rows."""

    def create(self, user_id: str, product_id: str, download_url: str) -> Download:
        ...

    def list_for_user(self, user_id: str) -> list[Download]:
        """Downloads of one user, newest first."""
        ...


@runtime_checkable
class IDeliveryService(Protocol):
    """
    Interface for file delivery.

    The service re-checks entitlement itself; it does not rely on the
    caller having done so.
    """

    async def download(self, user_id: str, product_id: str) -> FileDelivery:
        """
        Prepare a product archive for streaming.

        The audit row is written once the returned stream is exhausted.

        Raises:
            DownloadForbiddenError: If the user is not entitled
            ProductFileNotFoundError: If the product has no stored file
                or the file is missing from the store
        """
        ...

    async def list_downloads(self, user_id: str) -> list[Download]:
        ...

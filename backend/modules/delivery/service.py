"""
Delivery service implementation.
"""

import logging
from contextlib import aclosing
from typing import AsyncIterator

from modules.catalog.interfaces import IProductRepository
from modules.entitlements.interfaces import IEntitlementService

from .exceptions import DownloadForbiddenError, ProductFileNotFoundError
from .interfaces import IDeliveryService, IDownloadRepository, IFileStore
from .models import Download, FileDelivery, ZIP_MEDIA_TYPE

logger = logging.getLogger(__name__)


class DeliveryService(IDeliveryService):
    """
    Streams product archives to entitled users and keeps the audit trail.

    Args:
        entitlements: Resolver consulted on every download
        products: Product lookups
        downloads: Audit trail
        files: Archive store
        chunk_size: Bytes per streamed chunk
        archive_extension: Appended to the product name for the download's file name
    """

    def __init__(
        self,
        entitlements: IEntitlementService,
        products: IProductRepository,
        downloads: IDownloadRepository,
        files: IFileStore,
        chunk_size: int = 64 * 1024,
        archive_extension: str = ".zip",
    ):
        self._entitlements = entitlements
        self._products = products
        self._downloads = downloads
        self._files = files
        self._chunk_size = chunk_size
        self._archive_extension = archive_extension

    async def download(self, user_id: str, product_id: str) -> FileDelivery:
        if not await self._entitlements.can_download(user_id, product_id):
            raise DownloadForbiddenError(product_id)

        product = self._products.get(product_id)
        if product is None:
            raise DownloadForbiddenError(product_id)

        stored = product.stored_file
        if stored is None:
            logger.warning("Integrity: product %s has no stored file", product_id)
            raise ProductFileNotFoundError(product_id)

        if not await self._files.exists(stored.name):
            logger.warning(
                "Integrity: stored file %s of product %s is missing from the file store",
                stored.name, product_id,
            )
            raise ProductFileNotFoundError(product_id, stored.name)

        size = await self._files.size(stored.name)
        return FileDelivery(
            filename=f"{product.name}{self._archive_extension}",
            media_type=ZIP_MEDIA_TYPE,
            size=size,
            chunks=self._stream_and_record(user_id, product_id, stored.name),
        )

    async def list_downloads(self, user_id: str) -> list[Download]:
        return self._downloads.list_for_user(user_id)

    async def _stream_and_record(
        self,
        user_id: str,
        product_id: str,
        file_name: str,
    ) -> AsyncIterator[bytes]:
        async with aclosing(self._files.stream(file_name, self._chunk_size)) as chunks:
            async for chunk in chunks:
                yield chunk
        self._record_download(user_id, product_id)

    def _record_download(self, user_id: str, product_id: str) -> None:
        # Best-effort: the bytes are already delivered
        try:
            self._downloads.create(user_id, product_id, f"/api/download/{product_id}")
        except Exception:
            logger.exception(
                "Failed to record download of product %s by user %s", product_id, user_id
            )

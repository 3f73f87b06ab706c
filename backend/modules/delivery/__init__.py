"""
Delivery module.

Streams product archives to entitled users and records each download.

Public API:
- IDeliveryService: Interface for downloads
- IFileStore / LocalFileStore: Archive storage
- IDownloadRepository: Audit trail contract
- Download, FileDelivery: Models
- Delivery exceptions
"""

from .interfaces import IDeliveryService, IDownloadRepository, IFileStore
from .file_store import LocalFileStore
from .models import Download, FileDelivery, ZIP_MEDIA_TYPE
from .exceptions import (
    DownloadForbiddenError,
    ProductFileNotFoundError,
    FileTooLargeError,
    InvalidFileNameError,
)

__all__ = [
    # Interfaces
    "IDeliveryService",
    "IDownloadRepository",
    "IFileStore",
    # Implementations
    "LocalFileStore",
    # Models
    "Download",
    "FileDelivery",
    "ZIP_MEDIA_TYPE",
    # Exceptions
    "DownloadForbiddenError",
    "ProductFileNotFoundError",
    "FileTooLargeError",
    "InvalidFileNameError",
]

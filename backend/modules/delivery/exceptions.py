"""
Delivery module exceptions.

These exceptions are raised by the delivery module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class DownloadForbiddenError(AuthorizationError):
    """
    Raised when an authenticated user is not entitled to a product.

    Distinct from an authentication failure so a client can offer
    "buy this" instead of "log in".
    """

    def __init__(self, product_id: str):
        super().__init__(
            "Access denied. Product not purchased.",
            code="DOWNLOAD_FORBIDDEN",
            details={"product_id": product_id},
        )


class ProductFileNotFoundError(NotFoundError):
    """
    Raised when a product has no stored file or the file is gone.

    Either way the catalog is inconsistent, so callers log it as an
    integrity problem.
    """

    def __init__(self, product_id: str, file_name: Optional[str] = None):
        details = {"product_id": product_id}
        if file_name:
            details["file_name"] = file_name
        super().__init__(
            "Product file not found",
            code="PRODUCT_FILE_NOT_FOUND",
            details=details,
        )


class FileTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"File exceeds the upload limit of {max_bytes} bytes",
            code="FILE_TOO_LARGE",
            details={"max_bytes": max_bytes},
        )


class InvalidFileNameError(ValidationError):
    """Raised when a stored-file name would escape the uploads directory."""

    def __init__(self, name: str):
        super().__init__(
            f"Invalid file name: {name}",
            code="INVALID_FILE_NAME",
            details={"name": name},
        )

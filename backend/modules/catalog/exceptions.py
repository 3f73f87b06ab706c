"""
Catalog module exceptions.
"""

from typing import Optional

from shared.exceptions import NotFoundError, ValidationError


class ProductNotFoundError(NotFoundError):
    """Raised when a product ID doesn't exist."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class InvalidCategoryError(ValidationError):
    """
    Raised when a category assignment doesn't hold together.

    Unknown category or subcategory, a subcategory without a category,
    or a subcategory that belongs to a different category.
    """

    def __init__(
        self,
        reason: str,
        category_id: Optional[str] = None,
        subcategory_id: Optional[str] = None,
    ):
        details = {"reason": reason}
        if category_id:
            details["category_id"] = category_id
        if subcategory_id:
            details["subcategory_id"] = subcategory_id
        super().__init__(
            f"Invalid category assignment: {reason}",
            code="INVALID_CATEGORY",
            details=details,
        )


class InvalidUploadError(ValidationError):
    """Raised when an uploaded file is not an accepted archive."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Invalid upload: {reason}",
            code="INVALID_UPLOAD",
            details={"filename": filename, "reason": reason},
        )


class InvalidProductError(ValidationError):
    """Raised when a product's stored-file reference is incomplete."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid product: {reason}",
            code="INVALID_PRODUCT",
            details={"reason": reason},
        )

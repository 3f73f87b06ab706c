"""
Catalog module interfaces.

The entitlement resolver and the delivery service only need product
lookups; the HTTP boundary uses the full ICatalogService.
"""

from typing import Protocol, Optional, Any, AsyncIterable, runtime_checkable

from .models import (
    Product,
    Category,
    Subcategory,
    CreateProductRequest,
    UpdateProductRequest,
    UploadedFile,
)


@runtime_checkable
class IProductRepository(Protocol):
    """Persistence contract for products. Products are never physically deleted."""

    def get(self, product_id: str) -> Optional[Product]:
        ...

    def list_products(self, include_inactive: bool = False) -> list[Product]:
        """Products, newest first."""
        ...

    def create(self, data: dict[str, Any]) -> Product:
        ...

    def update(self, product_id: str, data: dict[str, Any]) -> Optional[Product]:
        ...


@runtime_checkable
class ICategoryRepository(Protocol):
    """Persistence contract for the category taxonomy."""

    def get_category(self, category_id: str) -> Optional[Category]:
        ...

    def list_categories(self) -> list[Category]:
        ...

    def create_category(self, name: str, description: Optional[str] = None) -> Category:
        ...

    def get_subcategory(self, subcategory_id: str) -> Optional[Subcategory]:
        ...

    def list_subcategories(self, category_id: Optional[str] = None) -> list[Subcategory]:
        ...

    def create_subcategory(
        self,
        category_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> Subcategory:
        ...


@runtime_checkable
class ICatalogService(Protocol):
    """
    Interface for catalog operations.

    Write operations are admin-only; the HTTP boundary enforces that.
    """

    async def get_product(self, product_id: str) -> Optional[Product]:
        """
        Get a product by ID, active or not.

        Returns:
            Product if found, None otherwise
        """
        ...

    async def list_products(self, include_inactive: bool = False) -> list[Product]:
        ...

    async def create_product(self, request: CreateProductRequest) -> Product:
        """
        Raises:
            InvalidCategoryError: If the category assignment is invalid
        """
        ...

    async def update_product(self, product_id: str, request: UpdateProductRequest) -> Product:
        """
        Raises:
            ProductNotFoundError: If the product doesn't exist
            InvalidCategoryError: If the category assignment is invalid
        """
        ...

    async def deactivate_product(self, product_id: str) -> Product:
        """
        Soft-delete a product. Orders and downloads keep referencing it.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        ...

    async def list_categories(self) -> list[Category]:
        ...

    async def list_subcategories(self, category_id: Optional[str] = None) -> list[Subcategory]:
        ...

    async def upload_product_file(
        self,
        chunks: AsyncIterable[bytes],
        original_name: str,
    ) -> UploadedFile:
        """
        Store an uploaded archive under a generated name.

        Raises:
            InvalidUploadError: If the file is not a .zip archive
            FileTooLargeError: If the upload exceeds the size limit
        """
        ...

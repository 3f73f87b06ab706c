"""
Catalog service implementation.
"""

import logging
from pathlib import PurePath
from typing import Any, AsyncIterable, Optional, Union

from modules.delivery.interfaces import IFileStore

from .exceptions import (
    InvalidCategoryError,
    InvalidProductError,
    InvalidUploadError,
    ProductNotFoundError,
)
from .interfaces import ICatalogService, ICategoryRepository, IProductRepository
from .models import (
    AssignedCategory,
    Category,
    CreateProductRequest,
    Product,
    Subcategory,
    Unassigned,
    UNASSIGNED,
    UpdateProductRequest,
    UploadedFile,
    assignment_to_columns,
)

logger = logging.getLogger(__name__)


class CatalogService(ICatalogService):
    """
    Products, taxonomy lookups and archive uploads.

    Args:
        products: Product persistence
        categories: Taxonomy persistence
        files: Where uploaded archives are written
        archive_extension: The only accepted upload extension
        max_upload_bytes: Upload size limit
    """

    def __init__(
        self,
        products: IProductRepository,
        categories: ICategoryRepository,
        files: IFileStore,
        archive_extension: str = ".zip",
        max_upload_bytes: int = 100 * 1024 * 1024,
    ):
        self._products = products
        self._categories = categories
        self._files = files
        self._archive_extension = archive_extension.lower()
        self._max_upload_bytes = max_upload_bytes

    async def get_product(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    async def list_products(self, include_inactive: bool = False) -> list[Product]:
        return self._products.list_products(include_inactive=include_inactive)

    async def create_product(self, request: CreateProductRequest) -> Product:
        assignment = self._resolve_assignment(request.category_id, request.subcategory_id)
        data: dict[str, Any] = {
            "name": request.name,
            "description": request.description,
            "price": request.price,
            "download_url": request.download_url,
            "is_active": request.is_active,
            **self._file_columns(request.file_name, request.file_size),
            **assignment_to_columns(assignment),
        }
        product = self._products.create(data)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    async def update_product(self, product_id: str, request: UpdateProductRequest) -> Product:
        current = self._products.get(product_id)
        if current is None:
            raise ProductNotFoundError(product_id)

        fields = request.model_fields_set
        data: dict[str, Any] = {}
        for name in ("name", "description", "price", "download_url", "is_active"):
            if name in fields and getattr(request, name) is not None:
                data[name] = getattr(request, name)

        if "file_name" in fields:
            size = request.file_size
            if size is None and current.stored_file and request.file_name == current.stored_file.name:
                size = current.stored_file.size
            data.update(self._file_columns(request.file_name, size))

        if "category_id" in fields or "subcategory_id" in fields:
            if "category_id" in fields:
                category_id = request.category_id
            else:
                category_id = getattr(current.category, "category_id", None)
            # Changing the category without naming a subcategory clears it
            assignment = self._resolve_assignment(category_id, request.subcategory_id)
            data.update(assignment_to_columns(assignment))

        product = self._products.update(product_id, data)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def deactivate_product(self, product_id: str) -> Product:
        product = self._products.update(product_id, {"is_active": False})
        if product is None:
            raise ProductNotFoundError(product_id)
        logger.info("Deactivated product %s", product_id)
        return product

    async def list_categories(self) -> list[Category]:
        return self._categories.list_categories()

    async def list_subcategories(self, category_id: Optional[str] = None) -> list[Subcategory]:
        return self._categories.list_subcategories(category_id)

    async def create_category(self, name: str, description: Optional[str] = None) -> Category:
        return self._categories.create_category(name, description)

    async def create_subcategory(
        self,
        category_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> Subcategory:
        if self._categories.get_category(category_id) is None:
            raise InvalidCategoryError("unknown category", category_id=category_id)
        return self._categories.create_subcategory(category_id, name, description)

    async def upload_product_file(
        self,
        chunks: AsyncIterable[bytes],
        original_name: str,
    ) -> UploadedFile:
        suffix = PurePath(original_name or "").suffix.lower()
        if suffix != self._archive_extension:
            raise InvalidUploadError(original_name, f"only {self._archive_extension} files are accepted")

        name, size = await self._files.save(chunks, self._archive_extension, self._max_upload_bytes)
        logger.info("Stored upload %s as %s (%d bytes)", original_name, name, size)
        return UploadedFile(file_name=name, file_size=size, original_name=original_name)

    def _resolve_assignment(
        self,
        category_id: Optional[str],
        subcategory_id: Optional[str],
    ) -> Union[Unassigned, AssignedCategory]:
        """Validate a category/subcategory pair against the taxonomy."""
        if not category_id:
            if subcategory_id:
                raise InvalidCategoryError(
                    "a subcategory requires a category", subcategory_id=subcategory_id
                )
            return UNASSIGNED

        if self._categories.get_category(category_id) is None:
            raise InvalidCategoryError("unknown category", category_id=category_id)

        if subcategory_id:
            subcategory = self._categories.get_subcategory(subcategory_id)
            if subcategory is None:
                raise InvalidCategoryError(
                    "unknown subcategory", category_id=category_id, subcategory_id=subcategory_id
                )
            if subcategory.category_id != category_id:
                raise InvalidCategoryError(
                    "subcategory belongs to another category",
                    category_id=category_id,
                    subcategory_id=subcategory_id,
                )

        return AssignedCategory(category_id=category_id, subcategory_id=subcategory_id or None)

    @staticmethod
    def _file_columns(file_name: Optional[str], file_size: Optional[int]) -> dict[str, Any]:
        if not file_name:
            return {"file_name": None, "file_size": None}
        if file_size is None:
            raise InvalidProductError("file_size is required with file_name")
        return {"file_name": file_name, "file_size": file_size}

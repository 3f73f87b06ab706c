"""
Catalog module.

Products, their stored archives and the category taxonomy used to
group them.

Public API:
- ICatalogService: Interface for catalog operations
- IProductRepository / ICategoryRepository: Persistence contracts
- Product, StoredFile, Category, Subcategory: Catalog records
- Unassigned / AssignedCategory: A product's category assignment
"""

from .interfaces import ICatalogService, IProductRepository, ICategoryRepository
from .models import (
    Product,
    StoredFile,
    Category,
    Subcategory,
    Unassigned,
    AssignedCategory,
    CreateProductRequest,
    UpdateProductRequest,
    UploadedFile,
)
from .exceptions import (
    ProductNotFoundError,
    InvalidCategoryError,
    InvalidUploadError,
    InvalidProductError,
)

__all__ = [
    # Interfaces
    "ICatalogService",
    "IProductRepository",
    "ICategoryRepository",
    # Models
    "Product",
    "StoredFile",
    "Category",
    "Subcategory",
    "Unassigned",
    "AssignedCategory",
    "CreateProductRequest",
    "UpdateProductRequest",
    "UploadedFile",
    # Exceptions
    "ProductNotFoundError",
    "InvalidCategoryError",
    "InvalidUploadError",
    "InvalidProductError",
]

"""
Catalog API endpoints.

Public reads for products and taxonomy; admin-only writes and uploads.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from api.dependencies import get_catalog_service
from api.middleware.auth import require_admin
from shared.config import get_settings
from shared.models import AuthenticatedUser

from .exceptions import ProductNotFoundError
from .interfaces import ICatalogService
from .models import (
    Category,
    CreateProductRequest,
    Product,
    Subcategory,
    UpdateProductRequest,
    UploadedFile,
)

router = APIRouter()


@router.get("/products", response_model=list[Product])
async def list_products(
    service: ICatalogService = Depends(get_catalog_service),
) -> list[Product]:
    """
    List active products, newest first.
    """
    return await service.list_products()


@router.get("/products/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    service: ICatalogService = Depends(get_catalog_service),
) -> Product:
    product = await service.get_product(product_id)
    if product is None or not product.is_active:
        raise ProductNotFoundError(product_id)
    return product


@router.post("/products", response_model=Product, status_code=201)
async def create_product(
    request: CreateProductRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Product:
    """
    Create a product (admin).

    Reference an archive from POST /api/upload with file_name/file_size.
    """
    return await service.create_product(request)


@router.patch("/products/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Product:
    return await service.update_product(product_id, request)


@router.delete("/products/{product_id}", response_model=Product)
async def deactivate_product(
    product_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> Product:
    """
    Deactivate a product (admin).

    Products are never physically removed: orders and downloads keep
    referencing them, and inactive products cannot be downloaded.
    """
    return await service.deactivate_product(product_id)


@router.get("/categories", response_model=list[Category])
async def list_categories(
    service: ICatalogService = Depends(get_catalog_service),
) -> list[Category]:
    return await service.list_categories()


@router.get("/subcategories", response_model=list[Subcategory])
async def list_subcategories(
    category_id: Optional[str] = Query(default=None, description="Only subcategories of this category"),
    service: ICatalogService = Depends(get_catalog_service),
) -> list[Subcategory]:
    return await service.list_subcategories(category_id)


@router.get("/subcategories/category/{category_id}", response_model=list[Subcategory])
async def list_subcategories_for_category(
    category_id: str,
    service: ICatalogService = Depends(get_catalog_service),
) -> list[Subcategory]:
    return await service.list_subcategories(category_id)


@router.post("/upload", response_model=UploadedFile, status_code=201)
async def upload_product_file(
    file: UploadFile = File(...),
    admin: AuthenticatedUser = Depends(require_admin),
    service: ICatalogService = Depends(get_catalog_service),
) -> UploadedFile:
    """
    Upload a product archive (admin).

    Only .zip files are accepted, up to the configured size limit.
    """
    chunk_size = get_settings().download_chunk_size

    async def chunks():
        while True:
            chunk = await file.read(chunk_size)
            if not chunk:
                break
            yield chunk

    try:
        return await service.upload_product_file(chunks(), file.filename or "")
    finally:
        await file.close()

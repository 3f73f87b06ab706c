"""Tests for the catalog service."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.catalog.exceptions import (
    InvalidCategoryError,
    InvalidProductError,
    InvalidUploadError,
    ProductNotFoundError,
)
from modules.catalog.models import (
    AssignedCategory,
    CreateProductRequest,
    Unassigned,
    UpdateProductRequest,
)
from modules.catalog.repository import InMemoryCategoryRepository, InMemoryProductRepository
from modules.catalog.service import CatalogService
from modules.delivery.exceptions import FileTooLargeError
from modules.delivery.file_store import LocalFileStore


async def chunks_of(*parts: bytes):
    for part in parts:
        yield part


@pytest.fixture
def categories():
    return InMemoryCategoryRepository()


@pytest.fixture
def service(tmp_path, categories):
    return CatalogService(
        products=InMemoryProductRepository(),
        categories=categories,
        files=LocalFileStore(tmp_path / "files"),
        max_upload_bytes=10,
    )


class TestProducts:
    @pytest.mark.asyncio
    async def test_create_product(self, service):
        product = await service.create_product(
            CreateProductRequest(name="  Course  ", price=Decimal("49.00"), file_name="a.zip", file_size=5)
        )
        assert product.name == "Course"
        assert product.price == Decimal("49.00")
        assert product.stored_file.name == "a.zip"
        assert isinstance(product.category, Unassigned)
        assert product.is_active is True

    @pytest.mark.asyncio
    async def test_file_name_requires_size(self, service):
        with pytest.raises(InvalidProductError):
            await service.create_product(CreateProductRequest(name="P", price=1, file_name="a.zip"))

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductRequest(name="P", price=Decimal("-1"))

    def test_camel_case_payload(self):
        request = CreateProductRequest.model_validate(
            {"name": "P", "price": "9.99", "fileName": "x.zip", "fileSize": 3, "isActive": False}
        )
        assert request.file_name == "x.zip"
        assert request.is_active is False

    @pytest.mark.asyncio
    async def test_list_hides_inactive(self, service):
        active = await service.create_product(CreateProductRequest(name="A", price=1))
        await service.create_product(CreateProductRequest(name="B", price=1, is_active=False))

        assert [p.id for p in await service.list_products()] == [active.id]
        assert len(await service.list_products(include_inactive=True)) == 2

    @pytest.mark.asyncio
    async def test_update_only_sent_fields(self, service):
        product = await service.create_product(
            CreateProductRequest(name="A", price=Decimal("10.00"), description="keep me")
        )
        updated = await service.update_product(
            product.id, UpdateProductRequest.model_validate({"price": "12.50"})
        )
        assert updated.price == Decimal("12.50")
        assert updated.description == "keep me"

    @pytest.mark.asyncio
    async def test_update_missing_product(self, service):
        with pytest.raises(ProductNotFoundError):
            await service.update_product("missing", UpdateProductRequest(name="x"))

    @pytest.mark.asyncio
    async def test_deactivate(self, service):
        product = await service.create_product(CreateProductRequest(name="A", price=1))
        deactivated = await service.deactivate_product(product.id)
        assert deactivated.is_active is False
        assert await service.get_product(product.id) is not None


class TestCategoryAssignment:
    @pytest.mark.asyncio
    async def test_assign_category_and_subcategory(self, service):
        category = await service.create_category("Courses")
        sub = await service.create_subcategory(category.id, "Video")

        product = await service.create_product(
            CreateProductRequest(name="A", price=1, category_id=category.id, subcategory_id=sub.id)
        )
        assert product.category == AssignedCategory(category_id=category.id, subcategory_id=sub.id)

    @pytest.mark.asyncio
    async def test_unknown_category(self, service):
        with pytest.raises(InvalidCategoryError):
            await service.create_product(CreateProductRequest(name="A", price=1, category_id="nope"))

    @pytest.mark.asyncio
    async def test_subcategory_without_category(self, service):
        category = await service.create_category("Courses")
        sub = await service.create_subcategory(category.id, "Video")
        with pytest.raises(InvalidCategoryError):
            await service.create_product(CreateProductRequest(name="A", price=1, subcategory_id=sub.id))

    @pytest.mark.asyncio
    async def test_subcategory_of_other_category(self, service):
        courses = await service.create_category("Courses")
        books = await service.create_category("Books")
        sub = await service.create_subcategory(books.id, "Fiction")
        with pytest.raises(InvalidCategoryError):
            await service.create_product(
                CreateProductRequest(name="A", price=1, category_id=courses.id, subcategory_id=sub.id)
            )

    @pytest.mark.asyncio
    async def test_subcategory_for_unknown_category(self, service):
        with pytest.raises(InvalidCategoryError):
            await service.create_subcategory("nope", "Video")

    @pytest.mark.asyncio
    async def test_changing_category_clears_subcategory(self, service):
        courses = await service.create_category("Courses")
        books = await service.create_category("Books")
        sub = await service.create_subcategory(courses.id, "Video")
        product = await service.create_product(
            CreateProductRequest(name="A", price=1, category_id=courses.id, subcategory_id=sub.id)
        )

        updated = await service.update_product(
            product.id, UpdateProductRequest.model_validate({"categoryId": books.id})
        )
        assert updated.category == AssignedCategory(category_id=books.id)

    @pytest.mark.asyncio
    async def test_explicit_null_unassigns(self, service):
        courses = await service.create_category("Courses")
        product = await service.create_product(
            CreateProductRequest(name="A", price=1, category_id=courses.id)
        )
        updated = await service.update_product(
            product.id, UpdateProductRequest.model_validate({"categoryId": None})
        )
        assert isinstance(updated.category, Unassigned)

    @pytest.mark.asyncio
    async def test_list_subcategories_by_category(self, service):
        courses = await service.create_category("Courses")
        books = await service.create_category("Books")
        await service.create_subcategory(courses.id, "Video")
        await service.create_subcategory(books.id, "Fiction")

        names = [s.name for s in await service.list_subcategories(courses.id)]
        assert names == ["Video"]
        assert len(await service.list_subcategories()) == 2


class TestUpload:
    @pytest.mark.asyncio
    async def test_zip_upload_is_stored(self, service, tmp_path):
        uploaded = await service.upload_product_file(chunks_of(b"PK", b"123"), "Course.ZIP")
        assert uploaded.file_name.endswith(".zip")
        assert uploaded.file_size == 5
        assert uploaded.original_name == "Course.ZIP"
        assert (tmp_path / "files" / uploaded.file_name).read_bytes() == b"PK123"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["notes.pdf", "archive.zip.exe", "", "zip"])
    async def test_non_zip_rejected(self, service, name):
        with pytest.raises(InvalidUploadError):
            await service.upload_product_file(chunks_of(b"data"), name)

    @pytest.mark.asyncio
    async def test_too_large_leaves_nothing_behind(self, service, tmp_path):
        with pytest.raises(FileTooLargeError):
            await service.upload_product_file(chunks_of(b"123456", b"789012"), "big.zip")
        assert list((tmp_path / "files").iterdir()) == []

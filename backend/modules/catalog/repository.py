"""
Catalog repositories.

Encapsulates Supabase queries and row mapping for the catalog tables:
- products
- categories
- subcategories

In-memory counterparts are provided for local development and tests.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from shared.repository import BaseRepository, parse_timestamp
from .models import (
    Product,
    Category,
    Subcategory,
    StoredFile,
    assignment_from_columns,
)


def _stored_file_from_columns(file_name: Optional[str], file_size: Optional[int]) -> Optional[StoredFile]:
    if not file_name:
        return None
    return StoredFile(name=file_name, size=file_size or 0)


class ProductRepository(BaseRepository[Product]):
    """
    Repository for the `products` table.

    Note: This repository does NOT perform authorization checks.
    """

    def get(self, product_id: str) -> Optional[Product]:
        result = self._db.table("products").select("*").eq("id", product_id).execute()
        if not result.data:
            return None
        return self._map_to_product(result.data[0])

    def list_products(self, include_inactive: bool = False) -> list[Product]:
        query = self._db.table("products").select("*")
        if not include_inactive:
            query = query.eq("is_active", True)
        result = query.order("created_at", desc=True).execute()
        return [self._map_to_product(row) for row in result.data or []]

    def create(self, data: dict[str, Any]) -> Product:
        result = self._db.table("products").insert(self._to_row(data)).execute()
        return self._map_to_product(result.data[0])

    def update(self, product_id: str, data: dict[str, Any]) -> Optional[Product]:
        row = {**self._to_row(data), "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._db.table("products").update(row).eq("id", product_id).execute()
        if not result.data:
            return None
        return self._map_to_product(result.data[0])

    def _to_row(self, data: dict[str, Any]) -> dict[str, Any]:
        row = dict(data)
        if isinstance(row.get("price"), Decimal):
            # numeric(10,2); sent as a string to keep it exact
            row["price"] = str(row["price"])
        return row

    def _map_to_product(self, data: dict[str, Any]) -> Product:
        """Map database row to Product model."""
        return Product(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description") or "",
            price=Decimal(str(data["price"])),
            download_url=data.get("download_url"),
            stored_file=_stored_file_from_columns(data.get("file_name"), data.get("file_size")),
            category=assignment_from_columns(data.get("category_id"), data.get("subcategory_id")),
            is_active=bool(data.get("is_active", True)),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )


class CategoryRepository(BaseRepository[Category]):
    """Repository for the `categories` and `subcategories` tables."""

    def get_category(self, category_id: str) -> Optional[Category]:
        result = self._db.table("categories").select("*").eq("id", category_id).execute()
        if not result.data:
            return None
        return Category(**result.data[0])

    def list_categories(self) -> list[Category]:
        result = self._db.table("categories").select("*").order("name").execute()
        return [Category(**row) for row in result.data or []]

    def create_category(self, name: str, description: Optional[str] = None) -> Category:
        result = (
            self._db.table("categories")
            .insert({"name": name, "description": description})
            .execute()
        )
        return Category(**result.data[0])

    def get_subcategory(self, subcategory_id: str) -> Optional[Subcategory]:
        result = self._db.table("subcategories").select("*").eq("id", subcategory_id).execute()
        if not result.data:
            return None
        return Subcategory(**result.data[0])

    def list_subcategories(self, category_id: Optional[str] = None) -> list[Subcategory]:
        query = self._db.table("subcategories").select("*")
        if category_id:
            query = query.eq("category_id", category_id)
        result = query.order("name").execute()
        return [Subcategory(**row) for row in result.data or []]

    def create_subcategory(
        self,
        category_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> Subcategory:
        result = (
            self._db.table("subcategories")
            .insert({"category_id": category_id, "name": name, "description": description})
            .execute()
        )
        return Subcategory(**result.data[0])


class InMemoryProductRepository:
    """
    In-memory product storage.

    For testing and development. Use ProductRepository for production.
    """

    def __init__(self) -> None:
        self._products: dict[str, Product] = {}

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def list_products(self, include_inactive: bool = False) -> list[Product]:
        products = [p for p in self._products.values() if include_inactive or p.is_active]
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def create(self, data: dict[str, Any]) -> Product:
        now = datetime.now(timezone.utc)
        product = self._build(
            {**data, "id": str(uuid.uuid4()), "created_at": now, "updated_at": now}
        )
        self._products[product.id] = product
        return product

    def update(self, product_id: str, data: dict[str, Any]) -> Optional[Product]:
        current = self._products.get(product_id)
        if current is None:
            return None
        row = self._to_row(current)
        row.update(data)
        row["updated_at"] = datetime.now(timezone.utc)
        product = self._build(row)
        self._products[product_id] = product
        return product

    @staticmethod
    def _to_row(product: Product) -> dict[str, Any]:
        row = product.model_dump(exclude={"stored_file", "category"})
        row["file_name"] = product.stored_file.name if product.stored_file else None
        row["file_size"] = product.stored_file.size if product.stored_file else None
        row["category_id"] = getattr(product.category, "category_id", None)
        row["subcategory_id"] = getattr(product.category, "subcategory_id", None)
        return row

    @staticmethod
    def _build(row: dict[str, Any]) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            description=row.get("description") or "",
            price=row["price"],
            download_url=row.get("download_url"),
            stored_file=_stored_file_from_columns(row.get("file_name"), row.get("file_size")),
            category=assignment_from_columns(row.get("category_id"), row.get("subcategory_id")),
            is_active=row.get("is_active", True),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


class InMemoryCategoryRepository:
    """In-memory taxonomy storage for testing and development."""

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}
        self._subcategories: dict[str, Subcategory] = {}

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def list_categories(self) -> list[Category]:
        return sorted(self._categories.values(), key=lambda c: c.name)

    def create_category(self, name: str, description: Optional[str] = None) -> Category:
        category = Category(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            created_at=datetime.now(timezone.utc),
        )
        self._categories[category.id] = category
        return category

    def get_subcategory(self, subcategory_id: str) -> Optional[Subcategory]:
        return self._subcategories.get(subcategory_id)

    def list_subcategories(self, category_id: Optional[str] = None) -> list[Subcategory]:
        subcategories = [
            s for s in self._subcategories.values()
            if category_id is None or s.category_id == category_id
        ]
        return sorted(subcategories, key=lambda s: s.name)

    def create_subcategory(
        self,
        category_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> Subcategory:
        subcategory = Subcategory(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            category_id=category_id,
            created_at=datetime.now(timezone.utc),
        )
        self._subcategories[subcategory.id] = subcategory
        return subcategory

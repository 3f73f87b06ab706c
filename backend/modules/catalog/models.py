"""
Catalog module data models.

Products are what the store sells. Categories and subcategories are plain
metadata used to group products; they take no part in entitlement.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class StoredFile(BaseModel):
    """Reference to a product archive in the file store."""

    name: str = Field(..., min_length=1, description="Generated file name in the uploads directory")
    size: int = Field(..., ge=0, description="Size in bytes at upload time")

    model_config = {"frozen": True}


class Unassigned(BaseModel):
    """The product is not filed under any category."""

    kind: Literal["unassigned"] = "unassigned"

    model_config = {"frozen": True}


class AssignedCategory(BaseModel):
    """The product is filed under a category, optionally a subcategory of it."""

    kind: Literal["assigned"] = "assigned"
    category_id: str
    subcategory_id: Optional[str] = None

    model_config = {"frozen": True}


CategoryAssignment = Annotated[Union[Unassigned, AssignedCategory], Field(discriminator="kind")]

UNASSIGNED = Unassigned()


def assignment_from_columns(
    category_id: Optional[str],
    subcategory_id: Optional[str],
) -> Union[Unassigned, AssignedCategory]:
    """Build the assignment from the nullable category columns of a row."""
    if not category_id:
        return UNASSIGNED
    return AssignedCategory(category_id=str(category_id), subcategory_id=subcategory_id or None)


def assignment_to_columns(assignment: Union[Unassigned, AssignedCategory]) -> dict[str, Optional[str]]:
    if isinstance(assignment, AssignedCategory):
        return {
            "category_id": assignment.category_id,
            "subcategory_id": assignment.subcategory_id,
        }
    return {"category_id": None, "subcategory_id": None}


class Product(BaseModel):
    """A product in the catalog."""

    id: str = Field(..., description="Product ID (UUID)")
    name: str = Field(..., description="Display name; also the download's file name")
    description: str = ""
    price: Decimal = Field(..., ge=0, description="List price, currency-agnostic")
    download_url: Optional[str] = Field(None, description="External download link, if any")
    stored_file: Optional[StoredFile] = None
    category: CategoryAssignment = UNASSIGNED
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class Category(BaseModel):
    """Top-level taxonomy node."""

    id: str
    name: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime


class Subcategory(BaseModel):
    """Taxonomy node belonging to exactly one category."""

    id: str
    name: str
    description: Optional[str] = None
    category_id: str
    is_active: bool = True
    created_at: datetime


_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def clean_product_name(value: str) -> str:
    """
    Strip a product name and reject blank names or control characters.

    The name becomes the download file name, so it must be safe to place
    in a response header.
    """
    value = value.strip()
    if not value:
        raise ValueError("Name must not be blank")
    if _CONTROL_CHARS.search(value):
        raise ValueError("Name must not contain control characters")
    return value


class CreateProductRequest(BaseModel):
    """Request to create a product (admin)."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=10000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    download_url: Optional[str] = Field(None, alias="downloadUrl")
    file_name: Optional[str] = Field(None, alias="fileName")
    file_size: Optional[int] = Field(None, ge=0, alias="fileSize")
    category_id: Optional[str] = Field(None, alias="categoryId")
    subcategory_id: Optional[str] = Field(None, alias="subcategoryId")
    is_active: bool = Field(default=True, alias="isActive")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return clean_product_name(value)


class UpdateProductRequest(BaseModel):
    """
    Partial product update (admin).

    Only fields present in the request body are changed. Sending
    `categoryId: null` explicitly moves the product back to unassigned.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=10000)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    download_url: Optional[str] = Field(None, alias="downloadUrl")
    file_name: Optional[str] = Field(None, alias="fileName")
    file_size: Optional[int] = Field(None, ge=0, alias="fileSize")
    category_id: Optional[str] = Field(None, alias="categoryId")
    subcategory_id: Optional[str] = Field(None, alias="subcategoryId")
    is_active: Optional[bool] = Field(None, alias="isActive")

    model_config = {"populate_by_name": True}

    @field_validator("name")
    @classmethod
    def name_is_clean(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return clean_product_name(value)


class UploadedFile(BaseModel):
    """Result of an archive upload, to be referenced by a product."""

    file_name: str = Field(..., description="Generated name; pass as file_name when creating the product")
    file_size: int = Field(..., ge=0)
    original_name: str

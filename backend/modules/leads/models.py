"""
Leads module data models.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator


class Lead(BaseModel):
    """A captured prospect. Converted once the same email buys something."""

    id: str
    first_name: str
    email: EmailStr
    source: str = "landing_page"
    is_converted: bool = False
    created_at: datetime


class CreateLeadRequest(BaseModel):
    """Landing-page email capture."""

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        validation_alias=AliasChoices("firstName", "first_name"),
    )
    email: EmailStr
    source: str = Field(default="landing_page", max_length=50)

    @field_validator("first_name")
    @classmethod
    def first_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("First name must not be blank")
        return value

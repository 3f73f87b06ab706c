"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents the authenticated caller.

    Populated from the user row behind a valid session and made available
    to route handlers via dependency injection. This is also the public
    profile returned by the auth endpoints, so it never carries the
    password hash or payment-processor references.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: EmailStr = Field(..., description="User's email address")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    profile_image_url: Optional[str] = Field(None, description="Avatar URL")
    is_admin: bool = Field(default=False, description="Whether the user manages the catalog")
    is_verified: bool = Field(default=False, description="Whether the email is verified")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore internal fields when built from a full user row
    }

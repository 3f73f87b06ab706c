"""
Identity module data models.

These models define the user record persisted by the identity store and
the request payloads of the registration and login endpoints.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.models import AuthenticatedUser


class OAuthProvider(str, Enum):
    """External identity providers a user account can be linked to."""

    GOOGLE = "google"
    GITHUB = "github"


class User(BaseModel):
    """
    A persisted user record.

    This is the full row, including the password hash and payment-processor
    references. It must never be returned from an endpoint; use
    `to_authenticated_user()` for anything that leaves the service.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: EmailStr = Field(..., description="Email address (unique, lower-cased)")
    password_hash: Optional[str] = Field(None, description="scrypt hash; None for OAuth-only accounts")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

    # External identity linkage
    google_id: Optional[str] = None
    github_id: Optional[str] = None

    # Payment processor references
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None

    has_paid: bool = Field(default=False, description="Global unlock: entitled to every active product")
    is_admin: bool = Field(default=False, description="Catalog administrator")
    is_verified: bool = Field(default=False, description="Email verified")

    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Last update time")

    def oauth_id(self, provider: OAuthProvider) -> Optional[str]:
        """Get the linked account id for an OAuth provider."""
        if provider == OAuthProvider.GOOGLE:
            return self.google_id
        return self.github_id

    def to_authenticated_user(self) -> AuthenticatedUser:
        """Project the record onto its public profile."""
        return AuthenticatedUser(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            profile_image_url=self.profile_image_url,
            is_admin=self.is_admin,
            is_verified=self.is_verified,
        )


def oauth_column(provider: OAuthProvider) -> str:
    """Column holding the linked account id for a provider."""
    return f"{provider.value}_id"


class RegisterRequest(BaseModel):
    """Request to register a local (email + password) account."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, max_length=128, description="Password")
    first_name: str = Field(..., min_length=1, max_length=100, alias="firstName")
    last_name: Optional[str] = Field(None, max_length=100, alias="lastName")

    model_config = {"populate_by_name": True}

    @field_validator("first_name")
    @classmethod
    def first_name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("First name must not be blank")
        return value


class LoginRequest(BaseModel):
    """Request to log in with email and password."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class OAuthProfile(BaseModel):
    """
    Identity asserted by an OAuth provider after a successful sign-in.

    Built by the OAuth callback from the provider's user-info response.
    """

    provider: OAuthProvider
    provider_user_id: str = Field(..., min_length=1)
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None

"""
Entitlements module data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class GrantSource(str, Enum):
    """Why a user may download a product."""

    ADMIN = "admin"
    GLOBAL_UNLOCK = "global_unlock"
    ORDER = "order"


class EntitlementGrant(BaseModel):
    """
    Proof that a user may download a product right now.

    Derived from current row state on every check and never cached, so a
    refund or an admin demotion takes effect on the next request.
    """

    user_id: str
    product_id: str
    source: GrantSource
    order_id: Optional[str] = Field(None, description="The completed order, for ORDER grants")

    model_config = {"frozen": True}


class EntitlementStatus(BaseModel):
    """Response of GET /api/entitlements/{product_id}."""

    product_id: str
    entitled: bool
    source: Optional[GrantSource] = None

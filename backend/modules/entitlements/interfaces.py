"""
Entitlements module interfaces.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.catalog.models import Product

from .models import EntitlementGrant


@runtime_checkable
class IEntitlementService(Protocol):
    """
    Decides whether a user may download a product.

    Absence of entitlement is a normal outcome: unknown users and unknown
    products yield no grant rather than an error.
    """

    async def resolve_grant(self, user_id: str, product_id: str) -> Optional[EntitlementGrant]:
        """
        Evaluate the grant paths in order, stopping at the first that holds:
        product active, then admin, then global unlock, then the newest
        settled order for the pair.
        """
        ...

    async def can_download(self, user_id: str, product_id: str) -> bool:
        ...

    async def list_entitled_products(self, user_id: str) -> list[Product]:
        """Active products the user may download, newest first."""
        ...

"""
Entitlements module.

Decides, from current state, whether a user may download a product.
"""

from .interfaces import IEntitlementService
from .models import GrantSource, EntitlementGrant, EntitlementStatus

__all__ = [
    "IEntitlementService",
    "GrantSource",
    "EntitlementGrant",
    "EntitlementStatus",
]

"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Repositories are chosen by `settings.storage_backend`: Supabase tables
for deployments, in-memory stores for local development and tests.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Any, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.catalog.interfaces import ICatalogService, ICategoryRepository, IProductRepository
    from modules.delivery.interfaces import IDeliveryService, IDownloadRepository, IFileStore
    from modules.entitlements.interfaces import IEntitlementService
    from modules.identity.interfaces import IIdentityService, IOAuthClient, IUserRepository
    from modules.leads.interfaces import ILeadRepository, ILeadService
    from modules.orders.interfaces import IOrderRepository, IOrderService
    from modules.payments.service import PaymentWebhookService
    from modules.sessions.interfaces import ISessionService, ISessionStore


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._instances: dict[str, Any] = {}

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def uses_memory(self) -> bool:
        return self.settings.storage_backend == "memory"

    def _db(self):
        from shared.database import get_supabase_client
        return get_supabase_client()

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if "users" not in self._instances:
            from modules.identity.repository import InMemoryUserRepository, UserRepository
            self._instances["users"] = (
                InMemoryUserRepository() if self.uses_memory else UserRepository(self._db())
            )
        return self._instances["users"]

    @property
    def session_store(self) -> "ISessionStore":
        """Get the session store instance."""
        if "sessions" not in self._instances:
            from modules.sessions.repository import InMemorySessionStore, SessionRepository
            self._instances["sessions"] = (
                InMemorySessionStore() if self.uses_memory else SessionRepository(self._db())
            )
        return self._instances["sessions"]

    @property
    def product_repository(self) -> "IProductRepository":
        """Get the product repository instance."""
        if "products" not in self._instances:
            from modules.catalog.repository import InMemoryProductRepository, ProductRepository
            self._instances["products"] = (
                InMemoryProductRepository() if self.uses_memory else ProductRepository(self._db())
            )
        return self._instances["products"]

    @property
    def category_repository(self) -> "ICategoryRepository":
        """Get the category repository instance."""
        if "categories" not in self._instances:
            from modules.catalog.repository import CategoryRepository, InMemoryCategoryRepository
            self._instances["categories"] = (
                InMemoryCategoryRepository() if self.uses_memory else CategoryRepository(self._db())
            )
        return self._instances["categories"]

    @property
    def order_repository(self) -> "IOrderRepository":
        """Get the order repository instance."""
        if "orders" not in self._instances:
            from modules.orders.repository import InMemoryOrderRepository, OrderRepository
            self._instances["orders"] = (
                InMemoryOrderRepository() if self.uses_memory else OrderRepository(self._db())
            )
        return self._instances["orders"]

    @property
    def lead_repository(self) -> "ILeadRepository":
        """Get the lead repository instance."""
        if "leads" not in self._instances:
            from modules.leads.repository import InMemoryLeadRepository, LeadRepository
            self._instances["leads"] = (
                InMemoryLeadRepository() if self.uses_memory else LeadRepository(self._db())
            )
        return self._instances["leads"]

    @property
    def download_repository(self) -> "IDownloadRepository":
        """Get the download audit repository instance."""
        if "downloads" not in self._instances:
            from modules.delivery.repository import DownloadRepository, InMemoryDownloadRepository
            self._instances["downloads"] = (
                InMemoryDownloadRepository() if self.uses_memory else DownloadRepository(self._db())
            )
        return self._instances["downloads"]

    @property
    def file_store(self) -> "IFileStore":
        """Get the product archive store."""
        if "files" not in self._instances:
            from modules.delivery.file_store import LocalFileStore
            self._instances["files"] = LocalFileStore(self.settings.uploads_dir)
        return self._instances["files"]

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def identity(self) -> "IIdentityService":
        """Get the identity service instance."""
        if "identity" not in self._instances:
            from modules.identity.service import IdentityService
            self._instances["identity"] = IdentityService(self.user_repository)
        return self._instances["identity"]

    @property
    def oauth_client(self) -> "IOAuthClient":
        """Get the Google / GitHub sign-in client."""
        if "oauth" not in self._instances:
            from modules.identity.oauth import HttpOAuthClient
            self._instances["oauth"] = HttpOAuthClient(self.settings)
        return self._instances["oauth"]

    @property
    def sessions(self) -> "ISessionService":
        """Get the session service instance."""
        if "session_service" not in self._instances:
            from modules.sessions.service import SessionService
            self._instances["session_service"] = SessionService(
                store=self.session_store,
                users=self.user_repository,
                ttl=timedelta(days=self.settings.session_ttl_days),
            )
        return self._instances["session_service"]

    @property
    def catalog(self) -> "ICatalogService":
        """Get the catalog service instance."""
        if "catalog" not in self._instances:
            from modules.catalog.service import CatalogService
            self._instances["catalog"] = CatalogService(
                products=self.product_repository,
                categories=self.category_repository,
                files=self.file_store,
                archive_extension=self.settings.archive_extension,
                max_upload_bytes=self.settings.max_upload_bytes,
            )
        return self._instances["catalog"]

    @property
    def leads(self) -> "ILeadService":
        """Get the lead service instance."""
        if "lead_service" not in self._instances:
            from modules.leads.service import LeadService
            self._instances["lead_service"] = LeadService(self.lead_repository)
        return self._instances["lead_service"]

    @property
    def orders(self) -> "IOrderService":
        """Get the order service instance."""
        if "order_service" not in self._instances:
            from modules.orders.service import OrderService
            self._instances["order_service"] = OrderService(
                orders=self.order_repository,
                products=self.product_repository,
                users=self.user_repository,
                leads=self.leads,
            )
        return self._instances["order_service"]

    @property
    def entitlements(self) -> "IEntitlementService":
        """Get the entitlement resolver instance."""
        if "entitlements" not in self._instances:
            from modules.entitlements.service import EntitlementService
            self._instances["entitlements"] = EntitlementService(
                users=self.user_repository,
                products=self.product_repository,
                orders=self.order_repository,
            )
        return self._instances["entitlements"]

    @property
    def delivery(self) -> "IDeliveryService":
        """Get the delivery service instance."""
        if "delivery" not in self._instances:
            from modules.delivery.service import DeliveryService
            self._instances["delivery"] = DeliveryService(
                entitlements=self.entitlements,
                products=self.product_repository,
                downloads=self.download_repository,
                files=self.file_store,
                chunk_size=self.settings.download_chunk_size,
                archive_extension=self.settings.archive_extension,
            )
        return self._instances["delivery"]

    @property
    def payment_webhooks(self) -> "PaymentWebhookService":
        """Get the Stripe webhook handler."""
        if "payment_webhooks" not in self._instances:
            from modules.payments.service import PaymentWebhookService
            self._instances["payment_webhooks"] = PaymentWebhookService(
                orders=self.orders,
                identity=self.identity,
                webhook_secret=self.settings.stripe_webhook_secret,
            )
        return self._instances["payment_webhooks"]

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._instances.clear()
        self._settings = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_identity_service() -> "IIdentityService":
    """FastAPI dependency for identity service."""
    return get_container().identity


def get_oauth_client() -> "IOAuthClient":
    """FastAPI dependency for the OAuth sign-in client."""
    return get_container().oauth_client


def get_session_service() -> "ISessionService":
    """FastAPI dependency for session service."""
    return get_container().sessions


def get_catalog_service() -> "ICatalogService":
    """FastAPI dependency for catalog service."""
    return get_container().catalog


def get_entitlement_service() -> "IEntitlementService":
    """FastAPI dependency for entitlement resolver."""
    return get_container().entitlements


def get_delivery_service() -> "IDeliveryService":
    """FastAPI dependency for delivery service."""
    return get_container().delivery


def get_order_service() -> "IOrderService":
    """FastAPI dependency for order service."""
    return get_container().orders


def get_lead_service() -> "ILeadService":
    """FastAPI dependency for lead service."""
    return get_container().leads


def get_payment_webhook_service() -> "PaymentWebhookService":
    """FastAPI dependency for the Stripe webhook handler."""
    return get_container().payment_webhooks

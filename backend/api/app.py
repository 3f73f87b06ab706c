"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DigitalProError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from modules.catalog.routes import router as catalog_router
from modules.delivery.routes import router as delivery_router
from modules.entitlements.routes import router as entitlements_router
from modules.leads.routes import router as leads_router
from modules.orders.routes import router as orders_router
from modules.payments.exceptions import WebhookVerificationError
from modules.payments.routes import router as payments_router

from .models.errors import ErrorResponse
from .routes import auth, health, oauth

logger = logging.getLogger(__name__)

# Checked in order; the first matching class decides the status code
ERROR_STATUS: list[tuple[type[DigitalProError], int]] = [
    (WebhookVerificationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 422),
    (ExternalServiceError, 502),
]


def status_for(exc: DigitalProError) -> int:
    for error_class, status_code in ERROR_STATUS:
        if isinstance(exc, error_class):
            return status_code
    return 500


async def domain_error_handler(request: Request, exc: DigitalProError) -> JSONResponse:
    """Render a domain error as the standard error envelope."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler: data-store and other unexpected failures.

    The cause is logged with its traceback and never sent to the client.
    """
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    body = ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
    return JSONResponse(status_code=500, content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(
        "Starting %s on %s:%s (storage: %s)",
        settings.app_name, settings.host, settings.port, settings.storage_backend,
    )
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Digital-goods storefront API: catalog, purchases and entitled downloads",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(DigitalProError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(oauth.router, prefix="/api", tags=["auth"])
    app.include_router(catalog_router, prefix="/api", tags=["catalog"])
    app.include_router(entitlements_router, prefix="/api", tags=["entitlements"])
    app.include_router(delivery_router, prefix="/api", tags=["downloads"])
    app.include_router(orders_router, prefix="/api", tags=["orders"])
    app.include_router(payments_router, prefix="/api", tags=["payments"])
    app.include_router(leads_router, prefix="/api", tags=["leads"])

    return app


# Application instance for uvicorn
app = create_app()

"""
DigitalPro API package.

Provides the FastAPI application for the DigitalPro storefront.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]

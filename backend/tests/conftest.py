"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Every test runs against the in-memory stores with a fresh service container
and a temporary uploads directory.
"""

from pathlib import Path
from typing import Any, Callable, Optional

import pytest
from fastapi.testclient import TestClient

from api.dependencies import ServiceContainer, get_container, reset_container
from shared.config import get_settings


TEST_PASSWORD = "secret1"


@pytest.fixture(autouse=True)
def memory_backend(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point the container at in-memory stores and a throwaway uploads dir."""
    uploads = tmp_path / "uploads"
    uploads.mkdir()
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("UPLOADS_DIR", str(uploads))
    monkeypatch.setenv("STRIPE_WEBHOOK_SECRET", "whsec_test")
    monkeypatch.delenv("ALLOW_CLIENT_PAYMENT_CONFIRMATION", raising=False)
    get_settings.cache_clear()
    reset_container()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def uploads_dir() -> Path:
    return get_settings().uploads_dir


@pytest.fixture
def container() -> ServiceContainer:
    return get_container()


@pytest.fixture
def client() -> TestClient:
    from api import app

    return TestClient(app)


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict[str, Any]]:
    """
    Register a user through the API.

    The client keeps the session cookie, so the last registered user is
    the one logged in.
    """

    def _register(email: str = "a@x.com", password: str = TEST_PASSWORD, first_name: str = "Ada"):
        response = client.post(
            "/api/register",
            json={"email": email, "password": password, "firstName": first_name},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def make_admin(container: ServiceContainer) -> Callable[[str], None]:
    def _make_admin(user_id: str) -> None:
        container.user_repository.update(user_id, {"is_admin": True})

    return _make_admin


@pytest.fixture
def make_product(container: ServiceContainer, uploads_dir: Path):
    """
    Create a product directly in the store, optionally with its archive on disk.
    """

    def _make_product(
        name: str = "P1",
        price: str = "49.00",
        file_name: Optional[str] = "p1.zip",
        content: Optional[bytes] = b"PK\x03\x04 product bytes",
        is_active: bool = True,
    ):
        data: dict[str, Any] = {
            "name": name,
            "description": "",
            "price": price,
            "is_active": is_active,
            "file_name": file_name,
            "file_size": len(content) if (file_name and content is not None) else (0 if file_name else None),
        }
        if file_name and content is not None:
            (uploads_dir / file_name).write_bytes(content)
        return container.product_repository.create(data)

    return _make_product

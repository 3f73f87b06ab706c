"""Tests for catalog endpoints."""

import pytest
from fastapi.testclient import TestClient

from api import app


@pytest.fixture
def admin_client(make_admin) -> TestClient:
    client = TestClient(app)
    response = client.post(
        "/api/register",
        json={"email": "admin@x.com", "password": "secret1", "firstName": "Admin"},
    )
    make_admin(response.json()["id"])
    return client


class TestPublicCatalog:
    def test_lists_active_products_only(self, client, make_product):
        active = make_product(name="Active")
        make_product(name="Retired", file_name=None, is_active=False)

        products = client.get("/api/products").json()
        assert [p["id"] for p in products] == [active.id]
        assert products[0]["category"] == {"kind": "unassigned"}

    def test_get_product(self, client, make_product):
        product = make_product()
        response = client.get(f"/api/products/{product.id}")
        assert response.status_code == 200
        assert response.json()["name"] == "P1"

    def test_inactive_product_is_hidden(self, client, make_product):
        product = make_product(is_active=False)
        response = client.get(f"/api/products/{product.id}")
        assert response.status_code == 404
        assert response.json()["error"] == "PRODUCT_NOT_FOUND"

    def test_taxonomy(self, client, container):
        courses = container.category_repository.create_category("Courses")
        container.category_repository.create_subcategory(courses.id, "Video")

        assert [c["name"] for c in client.get("/api/categories").json()] == ["Courses"]
        by_query = client.get("/api/subcategories", params={"category_id": courses.id}).json()
        by_path = client.get(f"/api/subcategories/category/{courses.id}").json()
        assert by_query == by_path
        assert [s["name"] for s in by_path] == ["Video"]


class TestAdminCatalog:
    def test_writes_require_admin(self, client, register):
        assert client.post("/api/products", json={"name": "P", "price": "1.00"}).status_code == 401
        register()
        assert client.post("/api/products", json={"name": "P", "price": "1.00"}).status_code == 403

    def test_create_with_category(self, admin_client, container):
        courses = container.category_repository.create_category("Courses")
        response = admin_client.post(
            "/api/products",
            json={"name": "P", "price": "1.00", "categoryId": courses.id},
        )
        assert response.status_code == 201
        assert response.json()["category"] == {
            "kind": "assigned",
            "category_id": courses.id,
            "subcategory_id": None,
        }

    def test_invalid_category(self, admin_client):
        response = admin_client.post(
            "/api/products",
            json={"name": "P", "price": "1.00", "categoryId": "nope"},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_CATEGORY"

    def test_update_and_deactivate(self, admin_client, client, make_product):
        product = make_product()
        response = admin_client.patch(f"/api/products/{product.id}", json={"name": "Renamed"})
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"

        response = admin_client.delete(f"/api/products/{product.id}")
        assert response.json()["is_active"] is False
        assert client.get("/api/products").json() == []

    def test_upload_rejects_non_zip(self, admin_client):
        response = admin_client.post(
            "/api/upload",
            files={"file": ("notes.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_UPLOAD"

    def test_upload_too_large(self, admin_client, container, uploads_dir):
        container.settings.max_upload_bytes = 4
        response = admin_client.post(
            "/api/upload",
            files={"file": ("big.zip", b"PK123456", "application/zip")},
        )
        assert response.status_code == 422
        assert response.json()["error"] == "FILE_TOO_LARGE"
        assert list(uploads_dir.iterdir()) == []

    def test_upload_stores_file(self, admin_client, uploads_dir):
        response = admin_client.post(
            "/api/upload",
            files={"file": ("course.zip", b"PK-data", "application/zip")},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["file_size"] == 7
        assert (uploads_dir / body["file_name"]).read_bytes() == b"PK-data"

    @pytest.mark.parametrize("name", ["Course\r\nSet-Cookie: x=1", "Course\x00"])
    def test_name_with_control_characters_rejected(self, admin_client, make_product, name):
        response = admin_client.post("/api/products", json={"name": name, "price": "1.00"})
        assert response.status_code == 422

        product = make_product()
        response = admin_client.patch(f"/api/products/{product.id}", json={"name": name})
        assert response.status_code == 422
        assert admin_client.get(f"/api/products/{product.id}").json()["name"] == "P1"

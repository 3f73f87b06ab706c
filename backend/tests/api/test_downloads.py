"""End-to-end download scenarios over HTTP."""

import logging

import pytest
from fastapi.testclient import TestClient

from api import app

ARCHIVE = b"PK\x03\x04" + b"course-content" * 100


def login_as(email: str, password: str = "secret1", first_name: str = "User") -> TestClient:
    client = TestClient(app)
    response = client.post(
        "/api/register",
        json={"email": email, "password": password, "firstName": first_name},
    )
    assert response.status_code == 201, response.text
    return client


@pytest.fixture
def admin(container) -> TestClient:
    client = login_as("admin@x.com")
    user_id = client.get("/api/user").json()["id"]
    container.user_repository.update(user_id, {"is_admin": True})
    return client


@pytest.fixture
def buyer() -> TestClient:
    return login_as("buyer@x.com")


def create_product(admin: TestClient, name: str, content: bytes = ARCHIVE) -> dict:
    """Upload an archive and create an active product referencing it."""
    upload = admin.post(
        "/api/upload",
        files={"file": (f"{name.lower()}.zip", content, "application/zip")},
    )
    assert upload.status_code == 201, upload.text
    uploaded = upload.json()

    response = admin.post(
        "/api/products",
        json={
            "name": name,
            "price": "49.00",
            "fileName": uploaded["file_name"],
            "fileSize": uploaded["file_size"],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestPurchaseThenDownload:
    def test_scenario_purchase_unlocks_download(self, admin, buyer):
        product = create_product(admin, "P1")

        response = buyer.get(f"/api/download/{product['id']}")
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied. Product not purchased."

        order = buyer.post(
            "/api/orders",
            json={"productId": product["id"], "amount": "49.00", "paymentIntentId": "pi_1"},
        )
        assert order.status_code == 201, order.text

        response = buyer.get(f"/api/download/{product['id']}")
        assert response.status_code == 200
        assert response.content == ARCHIVE
        assert response.headers["content-type"] == "application/zip"
        assert response.headers["content-length"] == str(len(ARCHIVE))
        assert response.headers["content-disposition"] == 'attachment; filename="P1.zip"'

        downloads = buyer.get("/api/my-downloads").json()
        assert len(downloads) == 1
        assert downloads[0]["product_id"] == product["id"]

    def test_entitlement_endpoint(self, admin, buyer):
        product = create_product(admin, "P1")
        before = buyer.get(f"/api/entitlements/{product['id']}").json()
        assert before == {"product_id": product["id"], "entitled": False, "source": None}

        buyer.post("/api/orders", json={"productId": product["id"], "amount": "49.00"})

        after = buyer.get(f"/api/entitlements/{product['id']}").json()
        assert after["entitled"] is True
        assert after["source"] == "order"
        assert [p["id"] for p in buyer.get("/api/my-products").json()] == [product["id"]]

    def test_anonymous_download(self, admin):
        product = create_product(admin, "P1")
        response = TestClient(app).get(f"/api/download/{product['id']}")
        assert response.status_code == 401


class TestGlobalUnlock:
    def test_scenario_global_unlock_without_order(self, admin, buyer):
        product = create_product(admin, "P2", content=b"PK p2 bytes")

        response = buyer.post("/api/mark-paid")
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = buyer.get(f"/api/download/{product['id']}")
        assert response.status_code == 200
        assert response.content == b"PK p2 bytes"
        assert buyer.get("/api/my-orders").json() == []

    def test_admin_downloads_everything(self, admin):
        product = create_product(admin, "P5")
        assert admin.get(f"/api/download/{product['id']}").status_code == 200


class TestRefund:
    def test_scenario_refund_revokes(self, admin, buyer):
        product = create_product(admin, "P3")
        order = buyer.post(
            "/api/orders", json={"productId": product["id"], "amount": "49.00"}
        ).json()
        assert buyer.get(f"/api/download/{product['id']}").status_code == 200

        response = admin.patch(f"/api/admin/orders/{order['id']}", json={"status": "refunded"})
        assert response.status_code == 200
        assert response.json()["status"] == "refunded"

        assert buyer.get(f"/api/download/{product['id']}").status_code == 403


class TestMissingFile:
    def test_scenario_missing_file(self, admin, buyer, caplog):
        response = admin.post(
            "/api/products",
            json={"name": "P4", "price": "49.00", "fileName": "p4.zip", "fileSize": 10},
        )
        product = response.json()
        buyer.post("/api/mark-paid")

        with caplog.at_level(logging.WARNING, logger="modules.delivery.service"):
            response = buyer.get(f"/api/download/{product['id']}")

        assert response.status_code == 404
        assert response.json()["error"] == "PRODUCT_FILE_NOT_FOUND"
        assert "Integrity" in caplog.text
        assert buyer.get("/api/my-downloads").json() == []


class TestInactiveProduct:
    def test_deactivated_product_cannot_be_downloaded(self, admin, buyer):
        product = create_product(admin, "P6")
        buyer.post("/api/orders", json={"productId": product["id"], "amount": "49.00"})

        assert admin.delete(f"/api/products/{product['id']}").status_code == 200
        assert buyer.get(f"/api/download/{product['id']}").status_code == 403
        assert admin.get(f"/api/download/{product['id']}").status_code == 403


class TestStoredNames:
    def test_control_characters_never_reach_the_header(self, client, register, make_admin, make_product):
        user = register()
        make_admin(user["id"])
        product = make_product(name="Course\r\nSet-Cookie: x=1")

        response = client.get(f"/api/download/{product.id}")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            'attachment; filename="Course__Set-Cookie: x=1.zip"'
        )
        assert "x" not in response.cookies

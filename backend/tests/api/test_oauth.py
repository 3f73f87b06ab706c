"""Tests for the Google / GitHub sign-in endpoints."""

from typing import Optional
from urllib.parse import parse_qs, urlparse

import pytest

from api import app
from api.dependencies import get_oauth_client
from modules.identity.exceptions import OAuthExchangeError
from modules.identity.models import OAuthProfile, OAuthProvider
from shared.config import get_settings

DASHBOARD = "http://localhost:5173/dashboard"


class FakeOAuthClient:
    """Stands in for the provider: hands back a fixed profile for any code."""

    def __init__(self):
        self.profile: Optional[OAuthProfile] = OAuthProfile(
            provider=OAuthProvider.GOOGLE,
            provider_user_id="g-123",
            email="ada@gmail.com",
            first_name="Ada",
            last_name="Lovelace",
        )
        self.error: Optional[Exception] = None
        self.exchanges: list[tuple[OAuthProvider, str, str]] = []

    def is_configured(self, provider: OAuthProvider) -> bool:
        return True

    def authorization_url(self, provider: OAuthProvider, state: str, redirect_uri: str) -> str:
        return f"https://{provider.value}.test/authorize?state={state}&redirect_uri={redirect_uri}"

    async def fetch_profile(self, provider: OAuthProvider, code: str, redirect_uri: str) -> OAuthProfile:
        self.exchanges.append((provider, code, redirect_uri))
        if self.error is not None:
            raise self.error
        return self.profile


@pytest.fixture
def provider():
    fake = FakeOAuthClient()
    app.dependency_overrides[get_oauth_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_oauth_client, None)


def start(client, name: str = "google") -> str:
    response = client.get(f"/api/auth/{name}", follow_redirects=False)
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


def callback(client, state: Optional[str], code: Optional[str] = "code-1", name: str = "google", **extra):
    params = {k: v for k, v in {"code": code, "state": state, **extra}.items() if v is not None}
    return client.get(f"/api/auth/{name}/callback", params=params, follow_redirects=False)


class TestStart:
    def test_redirects_with_state_cookie(self, client, provider):
        response = client.get("/api/auth/google", follow_redirects=False)

        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert location.netloc == "google.test"
        state = parse_qs(location.query)["state"][0]
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{get_settings().oauth_state_cookie_name}={state}")
        assert "HttpOnly" in cookie
        assert "Path=/api/auth" in cookie

    def test_unknown_provider(self, client, provider):
        assert client.get("/api/auth/twitter", follow_redirects=False).status_code == 422

    def test_unconfigured_provider(self, client, monkeypatch):
        for name in ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"):
            monkeypatch.delenv(name, raising=False)
        get_settings.cache_clear()

        response = client.get("/api/auth/google", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["error"] == "OAUTH_PROVIDER_NOT_CONFIGURED"


class TestCallback:
    def test_new_user_is_created_and_logged_in(self, client, provider, container):
        state = start(client)

        response = callback(client, state)

        assert response.status_code == 302
        assert response.headers["location"] == DASHBOARD
        me = client.get("/api/user")
        assert me.status_code == 200
        assert me.json()["email"] == "ada@gmail.com"
        assert me.json()["is_verified"] is True
        assert container.user_repository.get_by_email("ada@gmail.com").google_id == "g-123"
        assert provider.exchanges == [
            (OAuthProvider.GOOGLE, "code-1", "http://testserver/api/auth/google/callback")
        ]

    def test_links_existing_account(self, client, provider, register):
        existing = register(email="ada@gmail.com")
        client.post("/api/logout")

        callback(client, start(client))

        assert client.get("/api/user").json()["id"] == existing["id"]

    def test_session_cookie_is_issued(self, client, provider):
        response = callback(client, start(client))
        cookies = response.headers.get_list("set-cookie")
        session = [c for c in cookies if c.startswith(f"{get_settings().session_cookie_name}=")]
        assert len(session) == 1
        assert "HttpOnly" in session[0]
        assert "Max-Age=604800" in session[0]

    @pytest.mark.parametrize(
        "state,code,extra",
        [
            ("forged", "code-1", {}),
            (None, "code-1", {}),
            ("use-real", None, {}),
            ("use-real", None, {"error": "access_denied"}),
        ],
    )
    def test_rejected_callbacks(self, client, provider, state, code, extra):
        real = start(client)

        response = callback(client, real if state == "use-real" else state, code, **extra)

        assert response.status_code == 302
        assert response.headers["location"] == "http://localhost:5173/auth?error=google_failed"
        assert provider.exchanges == []
        assert client.get("/api/user").status_code == 401

    def test_callback_without_start(self, client, provider):
        response = callback(client, "some-state")
        assert response.headers["location"].endswith("/auth?error=google_failed")
        assert provider.exchanges == []

    def test_failed_exchange(self, client, provider):
        provider.error = OAuthExchangeError("github", "provider request failed")
        state = start(client, "github")

        response = callback(client, state, name="github")

        assert response.headers["location"] == "http://localhost:5173/auth?error=github_failed"
        assert client.get("/api/user").status_code == 401

"""
OAuth 2.0 authorization-code client for Google and GitHub sign-in.

The client builds the provider's consent URL and, on callback, trades the
authorization code for an access token and reads the user's profile. It
never creates users itself; the resulting OAuthProfile goes to
IIdentityService.login_with_oauth.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from shared.config import Settings

from .exceptions import OAuthExchangeError, OAuthProviderNotConfiguredError
from .models import OAuthProfile, OAuthProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderEndpoints:
    authorize_url: str
    token_url: str
    userinfo_url: str
    scope: str


ENDPOINTS: dict[OAuthProvider, ProviderEndpoints] = {
    OAuthProvider.GOOGLE: ProviderEndpoints(
        authorize_url="https://accounts.google.com/o/oauth2/v2/auth",
        token_url="https://oauth2.googleapis.com/token",
        userinfo_url="https://openidconnect.googleapis.com/v1/userinfo",
        scope="openid email profile",
    ),
    OAuthProvider.GITHUB: ProviderEndpoints(
        authorize_url="https://github.com/login/oauth/authorize",
        token_url="https://github.com/login/oauth/access_token",
        userinfo_url="https://api.github.com/user",
        scope="user:email",
    ),
}

GITHUB_EMAILS_URL = "https://api.github.com/user/emails"


def google_profile(info: dict[str, Any]) -> OAuthProfile:
    """Map Google's OpenID Connect userinfo response."""
    return OAuthProfile(
        provider=OAuthProvider.GOOGLE,
        provider_user_id=str(info.get("sub") or ""),
        email=info.get("email") or "",
        first_name=info.get("given_name") or None,
        last_name=info.get("family_name") or None,
        profile_image_url=info.get("picture") or None,
    )


def github_profile(info: dict[str, Any], emails: list[dict[str, Any]]) -> OAuthProfile:
    """
    Map GitHub's /user response.

    The public email is often hidden, so the primary verified address from
    /user/emails is preferred when present.
    """
    email = next(
        (e.get("email") for e in emails if e.get("primary") and e.get("verified")),
        info.get("email"),
    )
    first_name, _, last_name = (info.get("name") or "").strip().partition(" ")
    return OAuthProfile(
        provider=OAuthProvider.GITHUB,
        provider_user_id=str(info.get("id") or ""),
        email=email or "",
        first_name=first_name or None,
        last_name=last_name.strip() or None,
        profile_image_url=info.get("avatar_url") or None,
    )


class HttpOAuthClient:
    """
    OAuth client talking to the providers over httpx.

    Args:
        settings: Supplies the client ids and secrets
        transport: Optional httpx transport (tests pass httpx.MockTransport)
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._credentials = {
            OAuthProvider.GOOGLE: (settings.google_client_id, settings.google_client_secret),
            OAuthProvider.GITHUB: (settings.github_client_id, settings.github_client_secret),
        }
        self._transport = transport
        self._timeout = timeout

    def is_configured(self, provider: OAuthProvider) -> bool:
        client_id, client_secret = self._credentials[provider]
        return bool(client_id and client_secret)

    def _require(self, provider: OAuthProvider) -> tuple[str, str]:
        if not self.is_configured(provider):
            raise OAuthProviderNotConfiguredError(provider.value)
        return self._credentials[provider]

    def authorization_url(self, provider: OAuthProvider, state: str, redirect_uri: str) -> str:
        client_id, _ = self._require(provider)
        endpoints = ENDPOINTS[provider]
        query = urlencode(
            {
                "client_id": client_id,
                "redirect_uri": redirect_uri,
                "response_type": "code",
                "scope": endpoints.scope,
                "state": state,
            }
        )
        return f"{endpoints.authorize_url}?{query}"

    async def fetch_profile(self, provider: OAuthProvider, code: str, redirect_uri: str) -> OAuthProfile:
        """
        Exchange an authorization code for the signed-in user's profile.

        Raises:
            OAuthProviderNotConfiguredError: The provider has no credentials
            OAuthExchangeError: The provider call failed or the profile has no usable email
        """
        client_id, client_secret = self._require(provider)
        endpoints = ENDPOINTS[provider]

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
                token_response = await client.post(
                    endpoints.token_url,
                    data={
                        "client_id": client_id,
                        "client_secret": client_secret,
                        "code": code,
                        "redirect_uri": redirect_uri,
                        "grant_type": "authorization_code",
                    },
                    headers={"Accept": "application/json"},
                )
                token_response.raise_for_status()
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise OAuthExchangeError(provider.value, "no access token in response")

                headers = {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}
                info_response = await client.get(endpoints.userinfo_url, headers=headers)
                info_response.raise_for_status()
                info = info_response.json()

                if provider == OAuthProvider.GOOGLE:
                    return google_profile(info)

                emails: list[dict[str, Any]] = []
                emails_response = await client.get(GITHUB_EMAILS_URL, headers=headers)
                if emails_response.is_success:
                    emails = emails_response.json()
                return github_profile(info, emails)
        except httpx.HTTPError as e:
            logger.warning("OAuth exchange with %s failed: %s", provider.value, e)
            raise OAuthExchangeError(provider.value, "provider request failed") from e
        except ValidationError as e:
            raise OAuthExchangeError(provider.value, "profile has no usable id or email") from e

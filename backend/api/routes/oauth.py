"""
OAuth sign-in endpoints (Google and GitHub).

GET /auth/{provider} sends the browser to the provider's consent screen
with a random state that is also kept in a short-lived HTTP-only cookie.
The provider redirects back to GET /auth/{provider}/callback; when the
state matches and the code exchange succeeds, the user is resolved
through login_with_oauth, a session cookie is issued and the browser is
sent to the dashboard. Any failure lands on the frontend's auth page with
`?error=<provider>_failed`.
"""

import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from modules.identity.exceptions import OAuthExchangeError
from modules.identity.interfaces import IIdentityService, IOAuthClient
from modules.identity.models import OAuthProvider
from modules.sessions.interfaces import ISessionService
from shared.config import Settings, get_settings

from ..dependencies import get_identity_service, get_oauth_client, get_session_service
from ..middleware.auth import set_session_cookie

logger = logging.getLogger(__name__)

router = APIRouter()

STATE_COOKIE_PATH = "/api/auth"


def callback_url(request: Request, provider: OAuthProvider, settings: Settings) -> str:
    base = settings.public_api_url.rstrip("/") or str(request.base_url).rstrip("/")
    return f"{base}/api/auth/{provider.value}/callback"


def _failure(provider: OAuthProvider, settings: Settings) -> RedirectResponse:
    response = RedirectResponse(
        f"{settings.frontend_url.rstrip('/')}/auth?error={provider.value}_failed",
        status_code=302,
    )
    _clear_state(response, settings)
    return response


def _clear_state(response: RedirectResponse, settings: Settings) -> None:
    response.delete_cookie(settings.oauth_state_cookie_name, path=STATE_COOKIE_PATH)


@router.get("/auth/{provider}", response_class=RedirectResponse, status_code=302)
async def start_oauth(
    provider: OAuthProvider,
    request: Request,
    oauth: IOAuthClient = Depends(get_oauth_client),
) -> RedirectResponse:
    """
    Redirect to the provider's consent screen.

    Returns 404 when the provider has no client credentials configured.
    """
    settings = get_settings()
    state = secrets.token_urlsafe(32)
    url = oauth.authorization_url(provider, state, callback_url(request, provider, settings))

    response = RedirectResponse(url, status_code=302)
    response.set_cookie(
        key=settings.oauth_state_cookie_name,
        value=state,
        max_age=settings.oauth_state_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path=STATE_COOKIE_PATH,
    )
    return response


@router.get("/auth/{provider}/callback", response_class=RedirectResponse, status_code=302)
async def oauth_callback(
    provider: OAuthProvider,
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    oauth: IOAuthClient = Depends(get_oauth_client),
    identity: IIdentityService = Depends(get_identity_service),
    sessions: ISessionService = Depends(get_session_service),
) -> RedirectResponse:
    """Finish the sign-in started by GET /auth/{provider}."""
    settings = get_settings()

    if error:
        logger.info("%s sign-in cancelled or denied: %s", provider.value, error)
        return _failure(provider, settings)

    expected = request.cookies.get(settings.oauth_state_cookie_name)
    if not code or not state or not expected or not secrets.compare_digest(state, expected):
        logger.warning("%s sign-in callback with missing or mismatched state", provider.value)
        return _failure(provider, settings)

    try:
        profile = await oauth.fetch_profile(provider, code, callback_url(request, provider, settings))
    except OAuthExchangeError as e:
        logger.warning("%s", e.message)
        return _failure(provider, settings)

    user = await identity.login_with_oauth(profile)
    session = await sessions.create_session(user)

    response = RedirectResponse(f"{settings.frontend_url.rstrip('/')}/dashboard", status_code=302)
    set_session_cookie(response, session, settings)
    _clear_state(response, settings)
    logger.info("User %s signed in with %s", user.id, provider.value)
    return response

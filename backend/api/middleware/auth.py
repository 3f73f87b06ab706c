"""
Session cookie authentication.

Resolves the session cookie to the calling user. Every authenticated
endpoint goes through get_current_user, so a missing, unknown or expired
session always produces the same 401.
"""

from typing import Optional

from fastapi import Depends, Request, Response

from modules.sessions.interfaces import ISessionService
from modules.sessions.models import SessionToken
from shared.config import Settings, get_settings
from shared.exceptions import AuthenticationError, AuthorizationError
from shared.models import AuthenticatedUser

from ..dependencies import get_session_service


class AuthError(AuthenticationError):
    """Authentication error with consistent format."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail, code="AUTHENTICATION_REQUIRED")


class AdminRequiredError(AuthorizationError):
    """The caller is logged in but is not an administrator."""

    def __init__(self):
        super().__init__("Admin access required", code="ADMIN_REQUIRED")


def get_session_token(request: Request) -> Optional[str]:
    """The raw session token from the request cookie, if any."""
    return request.cookies.get(get_settings().session_cookie_name) or None


def set_session_cookie(response: Response, session: SessionToken, settings: Settings) -> None:
    """
    Deliver a session token as an HTTP-only cookie.

    Max-Age matches the session's fixed lifetime.
    """
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session.token,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite=settings.session_cookie_samesite,
        path="/",
    )


async def get_optional_user(
    request: Request,
    sessions: ISessionService = Depends(get_session_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    user = await sessions.resolve_session(get_session_token(request))
    if user is None:
        return None
    return user.to_authenticated_user()


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if user is None:
        raise AuthError()
    return user


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Dependency that requires a logged-in administrator (401, then 403)."""
    if not user.is_admin:
        raise AdminRequiredError()
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
RequireAdmin = Depends(require_admin)
OptionalAuth = Depends(get_optional_user)

"""
Authentication endpoints.

Local registration and login issue a session cookie; logout destroys the
session. All of them return the caller's public profile, never the
password hash.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel

from modules.identity.interfaces import IIdentityService
from modules.identity.models import LoginRequest, RegisterRequest, User
from modules.sessions.interfaces import ISessionService
from shared.config import get_settings
from shared.models import AuthenticatedUser

from ..dependencies import get_identity_service, get_session_service
from ..middleware.auth import (
    clear_session_cookie,
    get_current_user,
    get_session_token,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class LogoutResponse(BaseModel):
    """Logout response model."""

    success: bool = True


async def _start_session(user: User, response: Response, sessions: ISessionService) -> AuthenticatedUser:
    session = await sessions.create_session(user)
    set_session_cookie(response, session, get_settings())
    return user.to_authenticated_user()


@router.post("/register", response_model=AuthenticatedUser, status_code=201)
async def register(
    request: RegisterRequest,
    response: Response,
    identity: IIdentityService = Depends(get_identity_service),
    sessions: ISessionService = Depends(get_session_service),
) -> AuthenticatedUser:
    """
    Register with email and password and log in.

    Returns 409 if the email is already registered.
    """
    user = await identity.register(request)
    return await _start_session(user, response, sessions)


@router.post("/login", response_model=AuthenticatedUser)
async def login(
    request: LoginRequest,
    response: Response,
    identity: IIdentityService = Depends(get_identity_service),
    sessions: ISessionService = Depends(get_session_service),
) -> AuthenticatedUser:
    """
    Log in with email and password.

    Unknown email and wrong password get the same 401.
    """
    user = await identity.authenticate(request.email, request.password)
    return await _start_session(user, response, sessions)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    sessions: ISessionService = Depends(get_session_service),
) -> LogoutResponse:
    """
    End the current session. Succeeds without a session too.

    Other sessions of the same user (other devices) stay valid.
    """
    await sessions.destroy_session(get_session_token(request))
    clear_session_cookie(response, get_settings())
    return LogoutResponse()


@router.get("/user", response_model=AuthenticatedUser)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return user

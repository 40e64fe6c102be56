"""
NoteKeep Backend — Auth Route Handlers
=======================================

What:  POST /api/auth/register, /login, /logout and GET /api/auth/me.
How:   Credentials are checked by UserService; the session itself is the
       signed cookie managed by Starlette's SessionMiddleware. Login writes
       the principal's username into it, logout empties it (which makes
       the middleware expire the cookie).

Responses:
    register/login/logout answer with a short plain-text acknowledgement,
    which is what the frontend's auth service reads.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from notekeep.dependencies import (
    SESSION_USERNAME_KEY,
    AuthContext,
    get_auth_context,
    get_user_service,
)
from notekeep.schemas.common import ErrorResponse
from notekeep.schemas.user import LoginRequest, UserCreate, UserSummary
from notekeep.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Account created"},
        409: {"description": "Username or email already taken", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: UserCreate,
    users: UserService = Depends(get_user_service),
) -> str:
    """
    Create an account. Does not log the new user in.

    Field rules (422 on violation): username 3-20, fullName 3-50,
    valid email, password 6-100.
    """
    await users.register(payload)
    return "User registered successfully"


@router.post(
    "/login",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Logged in; session cookie set"},
        401: {"description": "Invalid email or password", "model": ErrorResponse},
    },
    summary="Log in with email and password",
)
async def login(
    payload: LoginRequest,
    request: Request,
    users: UserService = Depends(get_user_service),
) -> str:
    user = await users.authenticate(payload.email, payload.password)

    # Drop whatever the previous session held before binding the new principal
    request.session.clear()
    request.session[SESSION_USERNAME_KEY] = user.username

    logger.info("User %s logged in", user.username)
    return "User logged in successfully"


@router.post(
    "/logout",
    response_class=PlainTextResponse,
    summary="Log out and clear the session",
)
async def logout(request: Request) -> str:
    """Safe to call without a session."""
    username = request.session.get(SESSION_USERNAME_KEY)
    request.session.clear()
    if username:
        logger.info("User %s logged out", username)
    return "User logged out successfully"


@router.get(
    "/me",
    response_model=UserSummary,
    responses={
        401: {"description": "Not logged in", "model": ErrorResponse},
        404: {"description": "Account no longer exists", "model": ErrorResponse},
    },
    summary="Current user",
)
async def me(ctx: AuthContext = Depends(get_auth_context)) -> UserSummary:
    return UserSummary.model_validate(ctx.user)

"""
NoteKeep Backend — Request Dependencies
========================================

What:  FastAPI dependencies that build services and the auth context.
How:   Each request gets one AsyncSession (get_db_session); both services
       are constructed around it, so everything a handler does lands in
       one transaction.

Authentication flow:
    cookie ──SessionMiddleware──▶ request.session["username"]
           ──get_principal────▶ Principal (401 if absent)
           ──get_auth_context─▶ AuthContext(principal, user) (404 if stale)
"""

from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.database import get_db_session
from notekeep.exceptions import UnauthorizedError
from notekeep.models import User
from notekeep.services.note_service import NoteService
from notekeep.services.user_service import UserService

# Key under which login stores the principal in the signed session cookie
SESSION_USERNAME_KEY = "username"


@dataclass(frozen=True)
class Principal:
    """The identity stored in the session: a username, nothing more."""
    username: str


@dataclass(frozen=True)
class AuthContext:
    """Principal plus the User row it resolved to for this request."""
    principal: Principal
    user: User

    @property
    def user_id(self) -> int:
        return self.user.id


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService(db)


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(db)


def get_principal(request: Request) -> Principal:
    """
    Read the principal from the session.

    Raises:
        UnauthorizedError: No session, or a session without a username.
    """
    username = request.session.get(SESSION_USERNAME_KEY)
    if not username:
        raise UnauthorizedError()
    return Principal(username=username)


async def get_auth_context(
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(get_user_service),
) -> AuthContext:
    """
    Resolve the principal to its User row.

    Raises:
        NotFoundError: The account was deleted after this session logged in.
    """
    user = await users.find_by_username(principal.username)
    return AuthContext(principal=principal, user=user)

"""
NoteKeep Backend — User Service
================================

What:  Registration, lookups, credential checks, and account deletion.
Who:   Auth routes (register/login/me) and the get_auth_context dependency,
       which resolves the session principal's username to a User row.
How:   Constructed per request with that request's AsyncSession; methods
       flush but never commit (get_db_session commits).

Errors:
    NotFoundError      unknown username (stale session)
    ConflictError      duplicate username/email (pre-check or IntegrityError)
    UnauthorizedError  bad email/password pair
    DatabaseError      anything else SQLAlchemy raises
"""

import logging
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    UnauthorizedError,
)
from notekeep.models import Note, User
from notekeep.schemas.user import UserCreate
from notekeep.security import DUMMY_HASH, hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    """Persistence operations on the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_username(self, username: str) -> User:
        """
        Resolve a username to its full row.

        The session principal carries only the username, so every
        authenticated request passes through here to learn the user id.

        Raises:
            NotFoundError: No such user (e.g. deleted after login).
        """
        try:
            result = await self.db.execute(
                select(User).where(User.username == username)
            )
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user %s: %s", username, str(e))
            raise DatabaseError(
                message="Could not load the user. Please try again.",
                context={"username": username},
            )

        if user is None:
            raise NotFoundError(resource="user", message="User not found")
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self.db.execute(
                select(User).where(User.email == email)
            )
        except SQLAlchemyError as e:
            logger.error("Database error looking up email: %s", str(e))
            raise DatabaseError(message="Could not load the user. Please try again.")
        return result.scalar_one_or_none()

    async def register(self, payload: UserCreate) -> User:
        """
        Create a user with a hashed password.

        The pre-checks give a precise message for the common case; the
        unique constraints still decide when two registrations race, and
        that IntegrityError is mapped to the same ConflictError.
        """
        await self._ensure_available(payload.username, payload.email)

        user = User(
            username=payload.username,
            full_name=payload.full_name,
            email=payload.email,
            password_hash=hash_password(payload.password),
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            logger.info("Registration lost a uniqueness race for %s", payload.username)
            raise ConflictError(message="Username or email is already registered")
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User registered: id=%s username=%s", user.id, user.username)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Check an email/password pair.

        The address is normalized the way EmailStr stored it at registration
        (domain lowercased), so the exact string the user registered with
        still matches.

        Raises:
            UnauthorizedError: Same message whether the email is unknown or
            the password is wrong.
        """
        try:
            normalized = validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError:
            normalized = None

        user = await self.find_by_email(normalized) if normalized else None
        if user is None:
            verify_password(password, DUMMY_HASH)
            raise UnauthorizedError(message="Invalid email or password")
        if not verify_password(password, user.password_hash):
            raise UnauthorizedError(message="Invalid email or password")
        return user

    async def delete_user(self, user_id: int) -> None:
        """
        Delete a user and every note they own.

        Two statements in the request transaction: children first, then the
        parent. The FK also cascades, but SQLite only honours it with
        PRAGMA foreign_keys=ON, so the notes are removed explicitly.
        """
        try:
            await self.db.execute(delete(Note).where(Note.user_id == user_id))
            await self.db.execute(delete(User).where(User.id == user_id))
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not delete the account. Please try again.",
                context={"user_id": user_id},
            )
        logger.info("User %s deleted with all notes", user_id)

    async def _ensure_available(self, username: str, email: str) -> None:
        result = await self.db.execute(
            select(User.username, User.email).where(
                (User.username == username) | (User.email == email)
            )
        )
        for taken_username, taken_email in result.all():
            if taken_username == username:
                raise ConflictError(message="Username is already taken", field="username")
            if taken_email == email:
                raise ConflictError(message="Email is already registered", field="email")

"""
NoteKeep Backend — User SQLAlchemy Model
=========================================

What:  ORM model representing the `users` table.
Who:   Used by UserService for registration and lookups, by NoteResponse for
       the owner summary, and by Alembic for schema management.

Table Design Rationale:
    - Integer primary key: assigned by the database on insert, never changes
    - username / email: unique constraints are the real guard against
      duplicates; UserService's pre-check only produces a nicer error
    - password_hash: passlib bcrypt string; the plain password never
      reaches this table and the column is never serialized
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, List

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notekeep.database import Base

if TYPE_CHECKING:
    from notekeep.models.note import Note


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created by POST /api/auth/register. There is no delete endpoint;
        UserService.delete_user removes the notes first, then the row.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Login handle, 3-20 characters",
    )

    full_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Display name, 3-50 characters",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Login identifier, unique",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="passlib bcrypt hash of the password",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # cascade + delete-orphan: dropping a note from user.notes deletes it.
    # Never iterated in request code; NoteService queries notes directly.
    notes: Mapped[List["Note"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Named to match revision 001 so autogenerate sees no drift
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"

"""
NoteKeep Backend — Note SQLAlchemy Model
=========================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - user_id: required FK to users.id with ON DELETE CASCADE, indexed
      because every list query filters on it
    - title: bounded (255) so it fits list views; content is unbounded TEXT
    - created_at / updated_at: UTC with timezone; updated_at is bumped by
      NoteService.update as well as by the ORM onupdate hook
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notekeep.database import Base

if TYPE_CHECKING:
    from notekeep.models.user import User


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A private text note owned by exactly one user.

    Query Patterns:
        - List a user's notes: WHERE user_id = :uid ORDER BY id
          → idx_notes_user_id
        - Get single note: WHERE id = :id, owner joined in the same query
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE", name="fk_notes_user_id_users"),
        nullable=False,
    )

    # Loaded explicitly (joinedload) by NoteService; a lazy load would fail
    # under AsyncSession anyway
    user: Mapped["User"] = relationship(back_populates="notes")

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, user_id={self.user_id}, title='{self.title}')>"

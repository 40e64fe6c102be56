"""
NoteKeep Backend — Note Service
================================

What:  CRUD operations over the notes table.
Who:   Called by the /api/notes route handlers.
How:   Constructed per request with that request's AsyncSession. Every
       method is one persistence call followed by a flush; the commit
       happens in get_db_session once the handler succeeds.

Trust boundary:
    NoteService does NOT check ownership. find_by_id returns any user's
    note; update and delete act on any id. The route handlers compare
    note.user_id with the session user before calling update/delete.
"""

import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from notekeep.exceptions import DatabaseError, NotFoundError
from notekeep.models import Note, User
from notekeep.schemas.note import NoteUpdate

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Error Handling Strategy:
        Missing rows become NotFoundError. SQLAlchemy failures are logged
        and wrapped in DatabaseError so no SQL reaches the client.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, note: Note) -> Note:
        """
        Insert a note and return it with id and timestamps assigned.

        The caller sets `note.user` (the session owner) before calling.
        """
        try:
            self.db.add(note)
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Note %s created for user %s", note.id, note.user_id)
        return note

    async def find_all_by_user(self, user: User) -> List[Note]:
        """
        All notes owned by `user`, in insertion order.

        Query plan:
            SELECT ... FROM notes JOIN users WHERE notes.user_id = :uid ORDER BY notes.id
            → idx_notes_user_id
        """
        try:
            result = await self.db.execute(
                select(Note)
                .options(joinedload(Note.user))
                .where(Note.user_id == user.id)
                .order_by(Note.id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error listing notes for user %s: %s", user.id, str(e))
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"user_id": user.id},
            )
        return list(result.scalars().all())

    async def find_by_id(self, note_id: int) -> Note:
        """
        Retrieve a single note with its owner joined in.

        Raises:
            NotFoundError: No note has this id (→ 404)
        """
        try:
            result = await self.db.execute(
                select(Note)
                .options(joinedload(Note.user))
                .where(Note.id == note_id)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id},
            )

        if note is None:
            raise NotFoundError(
                resource="note",
                resource_id=str(note_id),
                message="Note not found",
            )
        return note

    async def update(self, note_id: int, patch: NoteUpdate) -> Note:
        """
        Overwrite title and content of an existing note.

        id, user and created_at are left untouched; updated_at is set here
        rather than left to the ORM hook so it moves even when the new
        values equal the old ones.
        """
        note = await self.find_by_id(note_id)
        note.title = patch.title
        note.content = patch.content
        note.updated_at = datetime.now(timezone.utc)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id},
            )
        logger.info("Note %s updated", note_id)
        return note

    async def delete(self, note_id: int) -> None:
        """Delete by id. Deleting an id that does not exist is a no-op."""
        try:
            await self.db.execute(delete(Note).where(Note.id == note_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id},
            )
        logger.info("Note %s deleted", note_id)

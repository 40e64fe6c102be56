"""
NoteKeep Backend — Note Request/Response Schemas
=================================================

What:  Pydantic models defining the notes API contract.
How:   FastAPI validates request bodies against NoteCreate/NoteUpdate and
       serializes every note through NoteResponse.

Projection:
    Handlers never return the ORM Note. NoteResponse flattens it and nests
    the owner as a UserSummary (id, username, fullName, email), so the
    password hash has no path into a response.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import ConfigDict, Field

from notekeep.schemas.user import CamelModel, UserSummary

if TYPE_CHECKING:
    from notekeep.models.note import Note


class NoteCreate(CamelModel):
    """
    What:  Body of POST /api/notes.

    Any `user` key in the body is ignored; the owner always comes from
    the session.
    """
    title: str = Field(default="", max_length=255, description="Note title")
    content: str = Field(default="", description="Note body")


class NoteUpdate(CamelModel):
    """
    What:  Body of PUT /api/notes/{id}.

    Full replacement of title and content; omitted fields become empty.
    """
    title: str = Field(default="", max_length=255, description="New title")
    content: str = Field(default="", description="New body")


class NoteResponse(CamelModel):
    """
    What:  Full representation of a note with its owner summary.
    Who:   Returned by every /api/notes endpoint except DELETE.
    """
    id: int = Field(description="Note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="Creation time (UTC)")
    updated_at: datetime = Field(description="Last modification time (UTC)")
    user: UserSummary = Field(description="Owner of the note")

    # Merged with CamelModel config: read straight from ORM attributes
    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_note(cls, note: "Note") -> "NoteResponse":
        """Build the projection; `note.user` must already be loaded."""
        return cls.model_validate(note)

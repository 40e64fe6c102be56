"""
NoteKeep Backend — Notes Route Handlers
========================================

What:  CRUD over the caller's notes under /api/notes.
How:   Every handler receives an AuthContext (session principal resolved to
       its User row) and a NoteService bound to the request's session.

Per-request checks, in order:
    1. No session                      → 401 (get_principal)
    2. Session user no longer exists   → 404 (get_auth_context)
    3. Note id does not exist          → 404 (NoteService.find_by_id)
    4. Note belongs to someone else    → 403 (_load_owned_note)

NoteService trusts its caller, so steps 3-4 must run before any
update or delete reaches it.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from notekeep.dependencies import AuthContext, get_auth_context, get_note_service
from notekeep.exceptions import ForbiddenError
from notekeep.models import Note
from notekeep.schemas.common import ErrorResponse
from notekeep.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from notekeep.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])

OWNERSHIP_ERRORS = {
    401: {"description": "Not logged in", "model": ErrorResponse},
    403: {"description": "Note belongs to another user", "model": ErrorResponse},
    404: {"description": "Note not found", "model": ErrorResponse},
}


async def _load_owned_note(notes: NoteService, note_id: int, ctx: AuthContext) -> Note:
    note = await notes.find_by_id(note_id)
    if note.user_id != ctx.user_id:
        logger.warning(
            "User %s denied access to note %s owned by user %s",
            ctx.user_id, note_id, note.user_id,
        )
        raise ForbiddenError(
            message="Access denied: Note does not belong to user",
            context={"note_id": note_id},
        )
    return note


@router.post(
    "",
    response_model=NoteResponse,
    responses={401: OWNERSHIP_ERRORS[401]},
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    ctx: AuthContext = Depends(get_auth_context),
    notes: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """The owner is always the session user, whatever the body says."""
    note = Note(title=payload.title, content=payload.content)
    note.user = ctx.user
    created = await notes.create(note)
    return NoteResponse.from_note(created)


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={401: OWNERSHIP_ERRORS[401]},
    summary="List the caller's notes",
)
async def list_notes(
    ctx: AuthContext = Depends(get_auth_context),
    notes: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    return [NoteResponse.from_note(note) for note in await notes.find_all_by_user(ctx.user)]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses=OWNERSHIP_ERRORS,
    summary="Get a single note",
)
async def get_note(
    note_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    notes: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await _load_owned_note(notes, note_id, ctx)
    return NoteResponse.from_note(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses=OWNERSHIP_ERRORS,
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    ctx: AuthContext = Depends(get_auth_context),
    notes: NoteService = Depends(get_note_service),
) -> NoteResponse:
    await _load_owned_note(notes, note_id, ctx)
    updated = await notes.update(note_id, payload)
    return NoteResponse.from_note(updated)


@router.delete(
    "/{note_id}",
    status_code=200,
    responses=OWNERSHIP_ERRORS,
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    ctx: AuthContext = Depends(get_auth_context),
    notes: NoteService = Depends(get_note_service),
) -> Response:
    await _load_owned_note(notes, note_id, ctx)
    await notes.delete(note_id)
    return Response(status_code=200)

"""
Notes API — Notes Route Handlers
=================================

What:  CRUD endpoints for notes under /notes.
Why:   HTTP entry point for clients; all logic is delegated to NoteService.
How:   Each request gets a NoteService built from its own database session
       and the process-wide cache backend (see get_note_service).

Status Codes:
    GET    /notes         200
    GET    /notes/{id}    200 | 404
    POST   /notes         201 + Location | 400
    PUT    /notes/{id}    204 | 400 | 404
    DELETE /notes/{id}    204 | 404
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.config import settings
from notes_api.database import get_db_session
from notes_api.schemas.note import ErrorResponse, NoteCreate, NoteResponse
from notes_api.services.cache_base import CacheBackend
from notes_api.services.cache_service import get_cache
from notes_api.services.note_service import NoteService
from notes_api.services.note_store import SQLAlchemyNoteStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])


async def get_note_service(
    db: AsyncSession = Depends(get_db_session),
    cache: CacheBackend = Depends(get_cache),
) -> NoteService:
    """
    FastAPI dependency assembling the orchestrator for one request.

    Tests replace this dependency to run the routes against fakes.
    """
    return NoteService(
        store=SQLAlchemyNoteStore(db),
        cache=cache,
        all_notes_ttl=settings.cache_all_notes_ttl,
        note_ttl=settings.cache_note_ttl,
    )


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    """Every note; served from the cache for up to five minutes after a miss."""
    return await service.list_notes()


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: UUID,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.get_note(note_id)


@router.post(
    "",
    response_model=NoteCreate,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid note input", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    response: Response,
    service: NoteService = Depends(get_note_service),
) -> NoteCreate:
    """
    Create a note.

    The body echoes the submitted payload; the new id is in the Location header
    (and X-Resource-ID for clients that cannot parse URLs).
    """
    note_id, created = await service.create_note(payload)
    response.headers["Location"] = f"{router.prefix}/{note_id}"
    response.headers["X-Resource-ID"] = str(note_id)
    return created


@router.put(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Invalid note input", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace a note's fields",
)
async def update_note(
    note_id: UUID,
    payload: NoteCreate,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.update_note(note_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note_id: UUID,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
NoteKeeper Backend - Notes Route Handlers
==========================================

What:  CRUD endpoints for notes plus the word statistics endpoint.
How:   Each handler receives a validated request, calls NoteService, and maps
       the domain result to a response schema. Errors raised by the service
       (NotFoundError, DatabaseError) are turned into JSON by the global
       handlers in main.py.

Endpoints:
    POST   /api/notes              create a note            → 201
    GET    /api/notes              list summaries (paged)   → 200
    GET    /api/notes/{id}         full note                → 200 | 404
    PUT    /api/notes/{id}         replace title/text(/tags) → 200 | 404
    DELETE /api/notes/{id}         delete                   → 204 | 404
    GET    /api/notes/{id}/stats   word frequencies         → 200 | 404
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from notekeeper.config import settings
from notekeeper.dependencies import get_note_service
from notekeeper.domain import UNSET, Tag
from notekeeper.schemas.note import (
    ErrorResponse,
    NoteCreateRequest,
    NoteDetailResponse,
    NotePageResponse,
    NoteUpdateRequest,
    WordStatisticsResponse,
)
from notekeeper.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])

_NOT_FOUND = {404: {"description": "Note not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid request", "model": ErrorResponse}}

# Largest page index whose row offset still fits a signed 64-bit integer
_MAX_PAGE = (2**63 - 1) // settings.max_page_size


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteDetailResponse,
    responses=_BAD_REQUEST,
    summary="Create a note",
    description="Creates a note with a title, text and optional tags. The creation date is set by the server.",
)
async def create_note(
    payload: NoteCreateRequest,
    service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    note = await service.create_note(
        title=payload.title,
        text=payload.text,
        tags=payload.tags,
    )
    return NoteDetailResponse.from_note(note)


@router.get(
    "",
    response_model=NotePageResponse,
    responses=_BAD_REQUEST,
    summary="List notes, newest first",
    description=(
        "Returns one page of note summaries (id, title, created_date) ordered by "
        "creation date descending. Optionally filtered to notes carrying `tag`."
    ),
)
async def list_notes(
    response: Response,
    page: int = Query(default=0, ge=0, le=_MAX_PAGE, description="Zero-based page index"),
    size: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    ),
    tag: Optional[Tag] = Query(default=None, description="Only notes with this tag"),
    service: NoteService = Depends(get_note_service),
) -> NotePageResponse:
    result = await service.list_notes(page=page, size=size, tag=tag)

    response.headers["X-Total-Count"] = str(result.total_elements)

    return NotePageResponse.from_page(result)


@router.get(
    "/{note_id}",
    response_model=NoteDetailResponse,
    responses=_NOT_FOUND,
    summary="Get a note by ID",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    note = await service.get_note(note_id)
    return NoteDetailResponse.from_note(note)


@router.put(
    "/{note_id}",
    response_model=NoteDetailResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Update a note",
    description=(
        "Replaces title and text. Tags are replaced only when `tags` is present "
        "and not null; send an empty list to remove all tags."
    ),
)
async def update_note(
    note_id: str,
    payload: NoteUpdateRequest,
    service: NoteService = Depends(get_note_service),
) -> NoteDetailResponse:
    note = await service.update_note(
        note_id,
        title=payload.title,
        text=payload.text,
        tags=payload.tags if payload.tags is not None else UNSET,
    )
    return NoteDetailResponse.from_note(note)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{note_id}/stats",
    response_model=WordStatisticsResponse,
    responses=_NOT_FOUND,
    summary="Word statistics for a note",
    description=(
        "Counts the words of the note text (case-insensitive, Latin and Ukrainian "
        "letters only) and returns them most frequent first."
    ),
)
async def get_word_statistics(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> WordStatisticsResponse:
    return await service.get_word_statistics(note_id)

"""
NoteKeeper Backend - FastAPI Dependencies
==========================================

What:  Builds the NoteRepository and NoteService used by each request.
How:   STORAGE_BACKEND=sql  → one SqlAlchemyNoteRepository per request, bound
                             to a session from database.session_scope()
                             (commit on success, rollback on error).
       STORAGE_BACKEND=memory → one process-wide InMemoryNoteRepository.

Tests override get_note_service (app.dependency_overrides) to inject a
service over a fresh in-memory repository.
"""

from typing import AsyncGenerator

from fastapi import Depends

from notekeeper.config import settings
from notekeeper.database import session_scope
from notekeeper.repositories.base import NoteRepository
from notekeeper.repositories.memory import InMemoryNoteRepository
from notekeeper.repositories.sql import SqlAlchemyNoteRepository
from notekeeper.services.note_service import NoteService

_memory_repository = InMemoryNoteRepository()


async def get_note_repository() -> AsyncGenerator[NoteRepository, None]:
    if settings.storage_backend == "memory":
        yield _memory_repository
        return

    async with session_scope() as session:
        yield SqlAlchemyNoteRepository(session)


def get_note_service(
    repository: NoteRepository = Depends(get_note_repository),
) -> NoteService:
    return NoteService(repository)

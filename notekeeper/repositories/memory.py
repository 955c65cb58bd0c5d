"""
NoteKeeper Backend - In-Memory Note Repository
===============================================

What:  Dict-backed NoteRepository.
Who:   Used by the test-suite and when STORAGE_BACKEND=memory.

Notes are stored and handed out as copies, so a caller that mutates a
returned Note changes nothing until it calls save() again, matching the
behaviour of the SQL repository.
"""

import uuid
from typing import Dict, List, Optional

from notekeeper.domain import Note, Page, Tag
from notekeeper.repositories.base import NoteRepository


class InMemoryNoteRepository(NoteRepository):
    """Process-local note storage. Not shared between workers."""

    def __init__(self) -> None:
        self._notes: Dict[str, Note] = {}

    async def save(self, note: Note) -> Note:
        if note.id is None:
            note = note.model_copy(update={"id": str(uuid.uuid4())})
        self._notes[note.id] = note.model_copy()
        return note.model_copy()

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        note = self._notes.get(note_id)
        return note.model_copy() if note is not None else None

    async def exists_by_id(self, note_id: str) -> bool:
        return note_id in self._notes

    async def delete_by_id(self, note_id: str) -> None:
        self._notes.pop(note_id, None)

    async def find_all_order_by_created_date_desc(self, page: int, size: int) -> Page[Note]:
        return self._page(list(self._notes.values()), page, size)

    async def find_by_tag_order_by_created_date_desc(
        self, tag: Tag, page: int, size: int
    ) -> Page[Note]:
        matching = [note for note in self._notes.values() if tag in note.tags]
        return self._page(matching, page, size)

    @staticmethod
    def _page(notes: List[Note], page: int, size: int) -> Page[Note]:
        ordered = sorted(notes, key=lambda n: (n.created_date, n.id), reverse=True)
        start = page * size
        return Page(
            items=[note.model_copy() for note in ordered[start:start + size]],
            page=page,
            size=size,
            total_elements=len(ordered),
        )

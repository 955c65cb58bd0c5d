"""
NoteKeeper Backend - Abstract Note Repository
==============================================

What:  The storage contract NoteService depends on.
How:   Concrete repositories inherit from NoteRepository and implement every
       abstract method. All methods are async because real implementations
       perform I/O.

Implementations:
    - SqlAlchemyNoteRepository: async SQLAlchemy (PostgreSQL / SQLite)
    - InMemoryNoteRepository: dict-backed, for tests and the "memory" backend

Contract details every implementation must honour:
    - save() assigns an id when the note has none and never changes an
      existing id.
    - Both listing methods order by created_date, newest first.
    - Page totals describe the (filtered) collection, not just the slice.
    - Storage failures are raised, never swallowed.
"""

from abc import ABC, abstractmethod
from typing import Optional

from notekeeper.domain import Note, Page, Tag


class NoteRepository(ABC):
    """Abstract repository interface for notes."""

    @abstractmethod
    async def save(self, note: Note) -> Note:  # pragma: no cover - interface only
        """Insert or update `note` and return the stored entity (with its id)."""

    @abstractmethod
    async def find_by_id(self, note_id: str) -> Optional[Note]:  # pragma: no cover
        """Fetch a note by id or return None if not found."""

    @abstractmethod
    async def exists_by_id(self, note_id: str) -> bool:  # pragma: no cover
        """Return True when a note with this id is stored."""

    @abstractmethod
    async def delete_by_id(self, note_id: str) -> None:  # pragma: no cover
        """Remove the note with this id; a missing id is a no-op."""

    @abstractmethod
    async def find_all_order_by_created_date_desc(
        self, page: int, size: int
    ) -> Page[Note]:  # pragma: no cover
        """Return one page of all notes, newest first."""

    @abstractmethod
    async def find_by_tag_order_by_created_date_desc(
        self, tag: Tag, page: int, size: int
    ) -> Page[Note]:  # pragma: no cover
        """Return one page of the notes carrying `tag`, newest first."""

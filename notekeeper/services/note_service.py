"""
NoteKeeper Backend - Note Service (Note Lifecycle)
===================================================

What:  Create / update / delete / get / list notes and compute word statistics.
How:   Reads and writes through a NoteRepository; delegates statistics to
       word_stats.word_frequencies.
Who:   Called by the route handlers in routes/notes.py.

State Model:
    A note id is either absent (no record) or present.
        absent  ──create──▶ present
        present ──update──▶ present
        present ──delete──▶ absent
    get_note, list_notes and get_word_statistics never change state.

Error Handling:
    - Unknown ids raise NotFoundError carrying the id and the operation.
    - Repository errors (DatabaseError, or anything else) propagate unchanged.
    - No retries. Concurrent updates to one note are last-write-wins.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional

from notekeeper.domain import UNSET, Note, NoteSummary, Page, Tag, TagUpdate
from notekeeper.exceptions import NotFoundError
from notekeeper.repositories.base import NoteRepository
from notekeeper.services.word_stats import word_frequencies

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NoteService:
    """
    Business logic layer for note operations.

    Args:
        repository: Storage used for every read and write.
        clock: Zero-argument callable returning the current aware datetime;
               stamps created_date on new notes.
    """

    def __init__(
        self,
        repository: NoteRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or _utcnow

    async def create_note(
        self,
        title: str,
        text: str,
        tags: Optional[Iterable[Tag]] = None,
    ) -> Note:
        """
        Build and persist a new note.

        created_date is taken from the service clock, never from the caller.
        Absent tags become an empty set.

        Raises:
            pydantic.ValidationError: title or text is blank
        """
        note = Note(
            title=title,
            text=text,
            created_date=self._clock(),
            tags=frozenset(tags or ()),
        )
        saved = await self._repository.save(note)
        logger.info("Note created: %s (tags=%s)", saved.id, sorted(t.value for t in saved.tags))
        return saved

    async def update_note(
        self,
        note_id: str,
        title: str,
        text: str,
        tags: TagUpdate = UNSET,
    ) -> Note:
        """
        Replace the title and text of a note, and its tags when given.

        Tag semantics:
            tags=UNSET        → existing tags are kept
            tags=[] / set()   → tags are cleared
            tags={...}        → tags are replaced exactly

        Raises:
            NotFoundError: no note with `note_id`
        """
        note = await self._require(note_id, operation="update")

        note.title = title
        note.text = text
        if tags is not UNSET:
            note.tags = frozenset(tags)

        saved = await self._repository.save(note)
        logger.info("Note updated: %s", saved.id)
        return saved

    async def delete_note(self, note_id: str) -> None:
        """
        Permanently remove a note.

        Existence is checked first, so deleting an unknown id is an error
        rather than a silent no-op.

        Raises:
            NotFoundError: no note with `note_id`
        """
        if not await self._repository.exists_by_id(note_id):
            raise self._not_found(note_id, operation="delete")
        await self._repository.delete_by_id(note_id)
        logger.info("Note deleted: %s", note_id)

    async def get_note(self, note_id: str) -> Note:
        """Raises NotFoundError when the note does not exist."""
        return await self._require(note_id, operation="get")

    async def list_notes(
        self,
        page: int = 0,
        size: int = 10,
        tag: Optional[Tag] = None,
    ) -> Page[NoteSummary]:
        """
        One page of note summaries, newest first.

        With `tag`, only notes carrying that tag are considered, and the page
        totals describe that filtered subset.
        """
        if tag is not None:
            notes = await self._repository.find_by_tag_order_by_created_date_desc(tag, page, size)
        else:
            notes = await self._repository.find_all_order_by_created_date_desc(page, size)
        return notes.map(Note.to_summary)

    async def get_word_statistics(self, note_id: str) -> Dict[str, int]:
        """
        Word-frequency table for the note's text.

        Raises:
            NotFoundError: no note with `note_id`
        """
        note = await self._require(note_id, operation="stats")
        return word_frequencies(note.text)

    async def _require(self, note_id: str, operation: str) -> Note:
        note = await self._repository.find_by_id(note_id)
        if note is None:
            raise self._not_found(note_id, operation)
        return note

    @staticmethod
    def _not_found(note_id: str, operation: str) -> NotFoundError:
        logger.info("Note %s not found (operation=%s)", note_id, operation)
        return NotFoundError(
            resource="Note",
            resource_id=note_id,
            context={"operation": operation},
        )

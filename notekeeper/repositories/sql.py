"""
NoteKeeper Backend - SQLAlchemy Note Repository
================================================

What:  NoteRepository backed by the `notes` / `note_tags` tables.
How:   Works on an AsyncSession owned by the caller. Writes are flushed so
       ids and constraint errors surface immediately; committing is left to
       database.session_scope().
Who:   Built per request by dependencies.get_note_repository when
       STORAGE_BACKEND=sql.

Error translation:
    Every SQLAlchemyError is logged and re-raised as DatabaseError (with the
    original chained), which the global handler turns into a generic 500.

Query plans:
    find_by_id:  SELECT ... FROM notes WHERE id = :id (+ selectin for tags)
    pages:       SELECT ... FROM notes [WHERE EXISTS (SELECT 1 FROM note_tags
                 WHERE note_tags.note_id = notes.id AND note_tags.tag = :tag)]
                 ORDER BY created_date DESC, id DESC LIMIT :size OFFSET :page*size
                 after the matching COUNT(*); skipped when the offset is past it
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.domain import Note, Page, Tag
from notekeeper.exceptions import DatabaseError
from notekeeper.models.note import NoteRecord, NoteTagRecord
from notekeeper.repositories.base import NoteRepository

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str, **context) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(
            context={"operation": operation, "error_type": type(e).__name__, **context},
        ) from e


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for DateTime(timezone=True)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAlchemyNoteRepository(NoteRepository):
    """Stores notes through an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, note: Note) -> Note:
        with _translate_errors("save", note_id=note.id):
            record: Optional[NoteRecord] = None
            if note.id is not None:
                record = await self._session.get(NoteRecord, note.id)
            if record is None:
                record = NoteRecord(
                    id=note.id or str(uuid.uuid4()),
                    created_date=note.created_date,
                )
                self._session.add(record)

            record.title = note.title
            record.text = note.text

            # Reuse rows for tags that stay, so the flush only inserts new
            # tags and deletes (orphans) dropped ones
            current = {tag_record.tag: tag_record for tag_record in record.tags}
            wanted = [tag.value for tag in Tag.ordered(note.tags)]
            record.tags = [current.get(value) or NoteTagRecord(tag=value) for value in wanted]

            await self._session.flush()
            return self._to_domain(record)

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        with _translate_errors("find_by_id", note_id=note_id):
            record = await self._session.get(NoteRecord, note_id)
            return self._to_domain(record) if record is not None else None

    async def exists_by_id(self, note_id: str) -> bool:
        with _translate_errors("exists_by_id", note_id=note_id):
            result = await self._session.execute(
                select(NoteRecord.id).where(NoteRecord.id == note_id)
            )
            return result.scalar_one_or_none() is not None

    async def delete_by_id(self, note_id: str) -> None:
        with _translate_errors("delete_by_id", note_id=note_id):
            record = await self._session.get(NoteRecord, note_id)
            if record is None:
                return
            await self._session.delete(record)
            await self._session.flush()

    async def find_all_order_by_created_date_desc(self, page: int, size: int) -> Page[Note]:
        with _translate_errors("find_all", page=page, size=size):
            return await self._page(None, page, size)

    async def find_by_tag_order_by_created_date_desc(
        self, tag: Tag, page: int, size: int
    ) -> Page[Note]:
        with _translate_errors("find_by_tag", tag=tag.value, page=page, size=size):
            return await self._page(tag, page, size)

    async def _page(self, tag: Optional[Tag], page: int, size: int) -> Page[Note]:
        query = select(NoteRecord)
        count_query = select(func.count()).select_from(NoteRecord)
        if tag is not None:
            has_tag = NoteRecord.tags.any(NoteTagRecord.tag == tag.value)
            query = query.where(has_tag)
            count_query = count_query.where(has_tag)

        count_result = await self._session.execute(count_query)
        total = count_result.scalar() or 0

        records = []
        offset = page * size
        # Nothing to fetch at or past the last row
        if offset < total:
            query = (
                query.order_by(desc(NoteRecord.created_date), desc(NoteRecord.id))
                .offset(offset)
                .limit(size)
            )
            result = await self._session.execute(query)
            records = list(result.scalars().all())

        return Page(
            items=[self._to_domain(record) for record in records],
            page=page,
            size=size,
            total_elements=total,
        )

    @staticmethod
    def _to_domain(record: NoteRecord) -> Note:
        return Note(
            id=record.id,
            title=record.title,
            text=record.text,
            created_date=_as_utc(record.created_date),
            tags=frozenset(Tag(tag_record.tag) for tag_record in record.tags),
        )

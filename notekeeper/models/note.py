"""
NoteKeeper Backend - Note SQLAlchemy Models
============================================

What:  ORM models for the `notes` and `note_tags` tables.
How:   Inherit from the shared DeclarativeBase; Alembic reads them for
       migrations; SqlAlchemyNoteRepository converts them to and from the
       domain Note.

Table Design:
    notes
        - id: UUID string, generated by the repository on first save
        - title, text: note content, NOT NULL
        - created_date: UTC with timezone, set once at creation
    note_tags
        - (note_id, tag): composite primary key, one row per tag on a note
        - tag stores the Tag enum value (BUSINESS, PERSONAL, IMPORTANT)
        - ON DELETE CASCADE from notes

    Index on notes.created_date DESC:
        Both list queries are "ORDER BY created_date DESC LIMIT/OFFSET".
    Index on note_tags.tag:
        The tag filter is "EXISTS (... WHERE note_tags.tag = :tag)".
"""

from datetime import datetime
from typing import List

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notekeeper.database import Base


class NoteRecord(Base):
    """
    A stored note row.

    Query Patterns:
        - Page of recent notes: ORDER BY created_date DESC OFFSET :o LIMIT :l
        - Single note: WHERE id = :id (primary key)
        - Page by tag: WHERE EXISTS (note_tags row with tag) ORDER BY created_date DESC
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Opaque note identifier (UUID4 string)",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Note title",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body, source of word statistics",
    )

    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When this note was created (UTC); never updated",
    )

    # selectin: tags are loaded with the note in one extra query, which
    # keeps attribute access free of lazy IO under AsyncSession
    tags: Mapped[List["NoteTagRecord"]] = relationship(
        back_populates="note",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_notes_created_date", created_date.desc()),
    )

    def __repr__(self) -> str:
        return f"<NoteRecord(id={self.id}, created_date='{self.created_date}')>"


class NoteTagRecord(Base):
    """One tag attached to one note."""

    __tablename__ = "note_tags"

    note_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    )

    tag: Mapped[str] = mapped_column(
        String(20),
        primary_key=True,
        comment="Tag enum value: BUSINESS, PERSONAL, IMPORTANT",
    )

    note: Mapped[NoteRecord] = relationship(back_populates="tags")

    __table_args__ = (
        Index("idx_note_tags_tag", "tag"),
    )

    def __repr__(self) -> str:
        return f"<NoteTagRecord(note_id={self.note_id}, tag='{self.tag}')>"

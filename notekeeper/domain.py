"""
NoteKeeper Backend - Domain Model
==================================

What:  The Note entity, its Tag enumeration, and the value objects returned
       by the service layer (NoteSummary, Page).
How:   Note is a Pydantic model with `validate_assignment=True`, so the
       non-blank rules and frozen fields hold on construction AND on every
       later attribute assignment.
Who:   Produced by repositories, orchestrated by NoteService, mapped to API
       schemas by the routes.

Invariants enforced here:
    - `id` and `created_date` are frozen: assigning either raises.
      Repositories attach a fresh id with `model_copy(update=...)`.
    - `title` and `text` are never empty or whitespace-only.
    - `tags` is a frozenset of Tag members only.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, FrozenSet, Generic, Iterable, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

T = TypeVar("T")
U = TypeVar("U")

# Matches the notes.title column width
TITLE_MAX_LENGTH = 255


class Tag(str, Enum):
    """Closed set of note categories. Wire values are case-sensitive."""

    BUSINESS = "BUSINESS"
    PERSONAL = "PERSONAL"
    IMPORTANT = "IMPORTANT"

    @classmethod
    def ordered(cls, tags: Iterable["Tag"]) -> List["Tag"]:
        """Returns `tags` sorted in declaration order (stable JSON output)."""
        members = list(cls)
        return sorted(set(tags), key=members.index)


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


# Marks "tags not provided" on update, as opposed to an explicit empty set
UNSET = _Unset.UNSET

TagUpdate = Union[Iterable[Tag], _Unset]


class Note(BaseModel):
    """
    A persisted text note.

    Lifecycle:
        1. Built by NoteService.create_note with `id=None`
        2. Repository.save assigns `id` (never reassigned afterwards)
        3. NoteService.update_note mutates title/text/tags in place, then saves
        4. NoteService.delete_note removes it
    """

    model_config = ConfigDict(validate_assignment=True)

    id: Optional[str] = Field(default=None, frozen=True)
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    text: str
    created_date: datetime = Field(frozen=True)
    tags: FrozenSet[Tag] = Field(default_factory=frozenset)

    @field_validator("title", "text")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be blank")
        return v

    def to_summary(self) -> "NoteSummary":
        return NoteSummary(id=self.id, title=self.title, created_date=self.created_date)


@dataclass(frozen=True)
class NoteSummary:
    """List projection of a Note: text and tags are left out."""

    id: Optional[str]
    title: str
    created_date: datetime


@dataclass
class Page(Generic[T]):
    """
    One slice of an ordered collection plus totals for the whole collection.

    `page` is the zero-based page index, `size` the requested page size.
    """

    items: List[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0 or self.total_elements == 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(
            items=[fn(item) for item in self.items],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )

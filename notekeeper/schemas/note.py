"""
NoteKeeper Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the HTTP contract of the API.
How:   FastAPI validates request bodies against these models, serializes
       responses through them, and builds the OpenAPI docs from them.
Who:   Used by route handlers as request types and return types.

Schemas are separate from the domain Note: the API decides what is exposed
(e.g. the list view has no text or tags) and in which order tags appear.
"""

from datetime import datetime
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from notekeeper.domain import TITLE_MAX_LENGTH, Note, NoteSummary, Page, Tag


# ══════════════════════════════════════════════════════════════════════════
# Request Models - What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteWriteRequest(BaseModel):
    """
    Body shared by POST /api/notes and PUT /api/notes/{id}.

    tags:
        Omitted or null → on create: no tags; on update: keep current tags.
        []              → on update: clear all tags.
    """
    title: str = Field(max_length=TITLE_MAX_LENGTH, description="Note title (required, non-blank)")
    text: str = Field(description="Note body (required, non-blank)")
    tags: Optional[Set[Tag]] = Field(
        default=None,
        description="Subset of BUSINESS, PERSONAL, IMPORTANT",
    )

    @field_validator("title", "text")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        """Rejects empty and whitespace-only values."""
        if not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} is required")
        return v

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Quarterly Business Review",
                    "text": "Prepare slides for the Q4 business review.",
                    "tags": ["BUSINESS", "IMPORTANT"],
                }
            ]
        }
    }


class NoteCreateRequest(NoteWriteRequest):
    """Body of POST /api/notes."""


class NoteUpdateRequest(NoteWriteRequest):
    """Body of PUT /api/notes/{id}."""


# ══════════════════════════════════════════════════════════════════════════
# Response Models - What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteDetailResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by POST, PUT and GET /api/notes/{id}.
    """
    id: str = Field(description="Note identifier")
    title: str = Field(description="Note title")
    text: str = Field(description="Note body")
    created_date: datetime = Field(description="When the note was created (UTC ISO 8601)")
    tags: List[Tag] = Field(description="Tags in declaration order")

    @classmethod
    def from_note(cls, note: Note) -> "NoteDetailResponse":
        return cls(
            id=note.id,
            title=note.title,
            text=note.text,
            created_date=note.created_date,
            tags=Tag.ordered(note.tags),
        )


class NoteSummaryResponse(BaseModel):
    """
    What:  Compact note representation for list views (no text, no tags).
    Who:   Items of GET /api/notes.
    """
    id: str = Field(description="Note identifier")
    title: str = Field(description="Note title")
    created_date: datetime = Field(description="Creation timestamp (UTC)")

    model_config = {"from_attributes": True}


class NotePageResponse(BaseModel):
    """
    What:  Offset-paginated wrapper for GET /api/notes.

    Pagination:
        page is zero-based; total_elements and total_pages describe the whole
        (optionally tag-filtered) collection.
    """
    items: List[NoteSummaryResponse] = Field(description="Note summaries, newest first")
    page: int = Field(description="Zero-based page index")
    size: int = Field(description="Requested page size")
    total_elements: int = Field(description="Number of notes matching the filter")
    total_pages: int = Field(description="Number of pages at this size")

    @classmethod
    def from_page(cls, page: Page[NoteSummary]) -> "NotePageResponse":
        return cls(
            items=[NoteSummaryResponse.model_validate(item) for item in page.items],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )


# Ordered word → count; JSON object keys keep the ordering
WordStatisticsResponse = Dict[str, int]


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "not_found",
            "message": "Note with ID 'abc' was not found",
            "details": {"resource": "Note", "resource_id": "abc", "operation": "get"},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    storage_backend: str = Field(description="Configured storage backend: sql, memory")
    database: str = Field(description="Database connectivity: connected, disconnected, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")

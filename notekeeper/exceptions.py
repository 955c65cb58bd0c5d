"""
NoteKeeper Backend - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status code.
Who:   NotFoundError is raised by NoteService; DatabaseError by the SQL
       repository; both are caught by the handlers in main.py.

Exception Hierarchy:
    NoteKeeperError (base)   → 500 Internal Server Error
    ├── NotFoundError        → 404 Not Found
    └── DatabaseError        → 500 Internal Server Error

Request validation failures are not modelled here: FastAPI raises
RequestValidationError for bad bodies and query parameters, and main.py
maps it to 400.
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only some handlers return it)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(NoteKeeperError):
    """
    Raised when an operation references a note id with no stored note.

    When:    get, update, delete or statistics on an unknown id.
    HTTP:    404 Not Found

    The context always names the resource and its id; callers add the
    attempted operation, e.g. ``context={"operation": "delete"}``.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(NoteKeeperError):
    """
    Raised when the storage backend fails.

    What:    A query, insert, update or delete failed inside a repository.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The underlying
    driver error is chained (``raise ... from exc``) and logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
Notes API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for each failure class of the API.
Why:   Services raise domain errors; global handlers in main.py map them to
       HTTP status codes and a uniform JSON error body.
How:   Each exception carries a user-safe message and an optional context dict
       (logged server-side, never returned to the client).

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError              → 400 Bad Request
    ├── NotFoundError                → 404 Not Found
    ├── StoreError                   → 500 Internal Server Error
    │   ├── StoreUnavailableError    (connection lost, database down)
    │   └── ConstraintViolationError (duplicate id, value out of range)
    └── CacheError                   → 500 Internal Server Error

    CacheError only reaches the client when cache invalidation fails after a
    mutation. On the read path NoteService treats it as a cache miss.
"""

from typing import Any, Dict, Iterable, List, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when client input fails validation.

    When:    Missing name/text/date, empty strings, values longer than 256 chars.
    HTTP:    400 Bad Request

    Raised before any store or cache call, so a rejected request has no side effects.

    Example response:
        {
            "error": "validation_error",
            "message": "Note input is invalid",
            "details": {"errors": [{"field": "name", "message": "Field required"}]}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def field_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Reduce pydantic error dicts to JSON-safe {field, message} pairs."""
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
        }
        for err in errors
    ]


class NotFoundError(NotesAPIError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /notes/{id} with an id absent from the store.
    HTTP:    404 Not Found

    The store adapter returns None for missing rows; NoteService converts
    that None into this exception.
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


class StoreError(NotesAPIError):
    """
    Raised when the persistent store fails.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The SQL error,
        constraint name and driver message are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreUnavailableError(StoreError):
    """Transient store failure: connection refused, dropped or timed out."""

    def __init__(
        self,
        message: str = "The database is temporarily unavailable.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConstraintViolationError(StoreError):
    """Structural store failure: duplicate primary key, value too long, NOT NULL."""

    def __init__(
        self,
        message: str = "The database rejected the write.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CacheError(NotesAPIError):
    """
    Raised when a Redis command fails, or when no client has been created.

    HTTP:    500 Internal Server Error (only when invalidation fails)
    """

    def __init__(
        self,
        message: str = "The cache is temporarily unavailable.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

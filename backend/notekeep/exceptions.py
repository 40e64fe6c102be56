"""
NoteKeep Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and route dependencies; caught by global handlers.

Exception Hierarchy:
    NoteKeepError (base)
    ├── UnauthorizedError        → 401 Unauthorized (no or invalid session)
    ├── ForbiddenError           → 403 Forbidden (note owned by someone else)
    ├── NotFoundError            → 404 Not Found (missing user/note row)
    ├── ConflictError            → 409 Conflict (duplicate username/email)
    ├── DatabaseError            → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests (built by RateLimitMiddleware)

A missing note and a note owned by another user are deliberately different
exceptions: 404 vs 403.
"""

from typing import Any, Dict, Optional


class NoteKeepError(Exception):
    """
    Base exception for all NoteKeep application errors.

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


class UnauthorizedError(NoteKeepError):
    """
    Raised when a request has no valid session, or login credentials fail.

    HTTP: 401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(NoteKeepError):
    """
    Raised when the caller is authenticated but does not own the resource.

    HTTP: 403 Forbidden
    """

    def __init__(
        self,
        message: str = "Access denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(NoteKeepError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    SQLAlchemy returns None for missing records; services convert that None
    into this exception so routes never test for it.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(NoteKeepError):
    """
    Raised when a write would violate a uniqueness constraint.

    When:    Registering a username or email that is already taken.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(NoteKeepError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. Details
        (SQL, constraint names) are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(NoteKeepError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP: 429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after

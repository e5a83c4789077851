"""
Alumnos API: Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the few ways a request can fail.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       `{"message": ...}` JSON bodies with the matching status code.
Who:   Raised by the repository, the file service and route handlers.

Exception Hierarchy:
    AlumnosError (base)
    ├── NotFoundError        → 404 Not Found
    ├── DatabaseError        → 500 Internal Server Error
    ├── ValidationError      → 400 Bad Request (uploads only)
    └── FileStorageError     → 500 Internal Server Error

Record handlers never validate fields themselves: a missing or malformed
field reaches the store and comes back as a DatabaseError.
"""

from typing import Any, Dict, Optional


class AlumnosError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Text returned to the client in the `message` field
        context:  Additional debug info (logged, never returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(AlumnosError):
    """
    Raised when a requested record does not exist.

    Detected from result cardinality (GET) or affected-row count (DELETE),
    never from a driver exception.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id


class DatabaseError(AlumnosError):
    """
    Raised when the store driver reports any failure.

    What:    Connectivity loss, constraint violation, malformed statement, timeout.
    HTTP:    500 Internal Server Error

    The message is the driver's own error text and is returned verbatim
    to the client. Existing clients depend on it for debugging, so it is
    never replaced by a generic message.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(AlumnosError):
    """Raised when an upload cannot be accepted as sent (HTTP 400)."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class FileStorageError(AlumnosError):
    """
    Raised when writing an uploaded file fails.

    When:    Upload directory missing and not creatable, disk full, permission denied.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

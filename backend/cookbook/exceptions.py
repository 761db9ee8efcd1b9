"""
Cookbook Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error cases the API exposes.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON error envelope with the matching HTTP status code.
Who:   Raised by the store adapter, services and the auth gate.

Exception Hierarchy:
    CookbookError (base)
    ├── ValidationError      → 400 Bad Request
    ├── AccessDeniedError    → 403 Forbidden
    ├── NotFoundError        → 404 Not Found
    ├── FileStorageError     → 500 Internal Server Error
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class CookbookError(Exception):
    """
    Base exception for all Cookbook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned for 4xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CookbookError):
    """
    Raised when client input fails a business rule.

    When:  A referenced id does not exist, an upload has the wrong type or size.
    HTTP:  400 Bad Request

    Schema-level problems (unknown fields, wrong types) are raised by FastAPI
    as RequestValidationError and rendered with the same envelope.
    """

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


class AccessDeniedError(CookbookError):
    """
    Raised by the auth gate when the caller does not name an existing user.

    HTTP:  403 Forbidden
    """

    def __init__(
        self,
        message: str = "Access denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CookbookError):
    """
    Raised when a requested record does not exist.

    When:  GET/PUT on /recipes/{id} (or any other collection) with an unknown id.
    HTTP:  404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so the handler can answer 404.
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


class FileStorageError(CookbookError):
    """
    Raised when writing or reading an uploaded image fails.

    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CookbookError):
    """
    Raised when a store operation fails unexpectedly.

    What:  Wraps SQLAlchemyError at the DocumentStore boundary.
    HTTP:  500 Internal Server Error

    The message returned to the client is always generic; the original
    error type is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

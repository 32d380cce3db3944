"""
Programmers Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services, request parsing and middleware; caught by global handlers.

Exception Hierarchy:
    ProgrammersError (base)
    ├── ValidationError              → 400 Bad Request (malformed body)
    ├── FieldValidationError         → 422 Unprocessable Entity (field → messages map)
    ├── UnsupportedMediaTypeError    → 415 Unsupported Media Type
    ├── XsrfError                    → 403 Forbidden (answered by XsrfMiddleware)
    ├── NotFoundError                → 404 Not Found
    └── DatabaseError                → 500 Internal Server Error
"""

from typing import Any, Dict, List, Optional


class ProgrammersError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only selectively returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ProgrammersError):
    """
    Raised when the request body cannot be read at all.

    When:    Invalid JSON, a JSON body that is not an object.
    HTTP:    400 Bad Request
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


class FieldValidationError(ProgrammersError):
    """
    Raised when one or more record fields fail their rules.

    HTTP:    422 Unprocessable Entity

    The response body is the bare `errors` mapping so the Angular client can
    attach each list to the matching form field:
        {"name": ["Name cannot be blank."]}
    """

    def __init__(
        self,
        errors: Dict[str, List[str]],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = errors
        fields = ", ".join(sorted(errors))
        super().__init__(message=f"Invalid fields: {fields}", context=context)


class UnsupportedMediaTypeError(ProgrammersError):
    """Request body is neither JSON nor form-encoded. HTTP 415."""

    def __init__(
        self,
        content_type: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["content_type"] = content_type
        super().__init__(
            message=(
                f"Content type '{content_type}' is not supported. Send application/json, "
                "application/x-www-form-urlencoded or multipart/form-data."
            ),
            context=ctx,
        )
        self.content_type = content_type


class XsrfError(ProgrammersError):
    """
    Raised when a mutating request lacks a matching XSRF token.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "The XSRF token is missing or invalid. Reload the page and try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ProgrammersError):
    """
    Raised when a requested resource does not exist.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records; the service layer converts
    that into this exception so routes stay free of status-code logic.
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


class DatabaseError(ProgrammersError):
    """
    Raised when database operations fail unexpectedly.

    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; SQL and constraint
    details are only logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

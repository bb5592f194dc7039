"""
Gebeta Backend: Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for every failure a request can hit.
How:   Each class carries a user-facing message, an optional context dict
       (logged, never returned), the HTTP status it maps to and a
       machine-readable error code. Exception handlers registered in
       main.py render them into the failure envelope.
Who:   Raised by the body parser, services and route handlers.

Exception Hierarchy:
    GebetaError (base)              → 500 server_error
    ├── InvalidInputError           → 400 invalid_input
    │   └── InvalidPayloadError     → 400 invalid_payload
    ├── NotFoundError               → 404 not_found
    ├── ForbiddenError              → 403 forbidden
    ├── DatabaseError               → 500 server_error
    └── LLMServiceError             → 503 assistant_unavailable
"""

from typing import Any, Dict, Optional


class GebetaError(Exception):
    """
    Base exception for all Gebeta application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error_code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidInputError(GebetaError):
    """
    Raised when client input fails validation.

    When:    Malformed identifier, missing required field, value out of range,
             duplicate business name.
    HTTP:    400 Bad Request
    """

    status_code = 400
    error_code = "invalid_input"

    def __init__(
        self,
        message: str = "Invalid input",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidPayloadError(InvalidInputError):
    """
    Raised by the body parser when a non-empty request body is not valid JSON.

    An empty body is not an error (it parses to an empty object); only
    content that is present and unparseable ends up here.
    """

    error_code = "invalid_payload"

    def __init__(
        self,
        message: str = "Invalid JSON",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(GebetaError):
    """
    Raised when a requested record does not exist.

    SQLAlchemy returns None for missing rows; services convert that into this
    exception so the status code is decided in one place.
    """

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ForbiddenError(GebetaError):
    """Raised when a cross-origin caller is not on the allowlist."""

    status_code = 403
    error_code = "forbidden"

    def __init__(
        self,
        message: str = "Origin not allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(GebetaError):
    """
    Raised when a database operation fails unexpectedly.

    The message returned to the client is always generic. Query text,
    constraint names and driver errors go to the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LLMServiceError(GebetaError):
    """
    Raised when the food assistant cannot produce a reply.

    When:    No API key configured, the model call failed or timed out.
    HTTP:    503 Service Unavailable
    """

    status_code = 503
    error_code = "assistant_unavailable"

    def __init__(
        self,
        message: str = "The food assistant is temporarily unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

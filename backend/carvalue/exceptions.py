"""
CarValue Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the different failure scenarios.
Why:   Services raise domain errors; global handlers registered in main.py
       translate them into structured JSON responses with the right status.
How:   Each exception carries a user-facing message and an optional context
       dict (logged server-side, only partially returned to the client).

Exception Hierarchy:
    CarValueError (base)
    ├── ValidationError   → 400 Bad Request (email in use, bad password)
    ├── ForbiddenError    → 403 Forbidden (not signed in, not an admin)
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict (user still owns reports)
    └── DatabaseError     → 500 Internal Server Error (store unavailable)

Propagation policy:
    No retries and no local recovery. A failing store call is logged once,
    wrapped in DatabaseError, and surfaces to the caller unchanged.
"""

from typing import Any, Dict, Optional


class CarValueError(Exception):
    """
    Base exception for all CarValue application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CarValueError):
    """
    Raised when client input is well-formed but rejected by a business rule.

    Request shape validation (types, ranges) is FastAPI's job and returns 422;
    this one covers rules only the service can check, such as an email that
    is already registered or a password that does not match.
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


class ForbiddenError(CarValueError):
    """Raised by the auth and admin guards when the session may not perform the request."""

    def __init__(
        self,
        message: str = "Forbidden resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CarValueError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None
    into NotFoundError so routes stay free of status-code logic.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(CarValueError):
    """Raised when an operation would break a relationship between rows."""

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(CarValueError):
    """
    Raised when the backing store cannot be reached or queried.

    The client always gets a generic message; the original exception type
    is kept in context for the server-side log.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

"""
Daily Diet Backend: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by dependencies and services; caught by global handlers.

Exception Hierarchy:
    DailyDietError (base)
    ├── UnauthorizedError   → 401 Unauthorized
    ├── NotFoundError       → 404 Not Found
    └── DatabaseError       → 500 Internal Server Error

Request body and path validation is left to FastAPI/Pydantic (422).
"""

from typing import Any, Dict, Optional


class DailyDietError(Exception):
    """
    Base exception for all Daily Diet application errors.

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


class UnauthorizedError(DailyDietError):
    """
    Raised when a request carries no usable session.

    When:    The session cookie is missing, or it names no registered user.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(DailyDietError):
    """
    Raised when a requested resource does not exist for the acting user.

    When:    GET/PUT/DELETE /meals/{id} where the meal is absent or owned by
             someone else. Both cases read the same to the client.
    HTTP:    404 Not Found
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


class DatabaseError(DailyDietError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, deadlock, etc.
    HTTP:    500 Internal Server Error

    The client always receives a generic message; the original error type
    is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

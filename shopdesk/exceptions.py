"""
ShopDesk Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for each error category the API reports.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    ShopDeskError (base)
    ├── ValidationError       → 400 Bad Request (missing or malformed input)
    ├── ConflictError         → 400 Bad Request (username/email already taken)
    ├── NotFoundError         → 404 Not Found
    ├── AuthenticationError   → 401 Unauthorized (bad username or password)
    └── DatabaseError         → 500 Internal Server Error (store failure)
"""

from typing import Any, Dict, Optional


class ShopDeskError(Exception):
    """
    Base exception for all ShopDesk application errors.

    Attributes:
        message:  Error description returned in the API response
        context:  Additional debug info (logged, not returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ShopDeskError):
    """
    Raised when client input fails validation.

    When:    Missing registration fields, a product price that is not a number,
             a JSON body that is not an object.
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


class ConflictError(ShopDeskError):
    """
    Raised when a write would duplicate a unique value (username or email).

    Reported as 400 rather than 409 to keep the existing client contract.
    """

    def __init__(
        self,
        message: str = "Username or Email already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ShopDeskError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing rows; services convert that None
    into this exception so the handler can answer 404.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class AuthenticationError(ShopDeskError):
    """
    Raised when login credentials are rejected.

    HTTP:    401 Unauthorized
    The message tells the client whether the username or the password was
    wrong; callers pass the exact text to return.
    """

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(ShopDeskError):
    """
    Raised when a store operation fails.

    HTTP:    500 Internal Server Error
    The message is the underlying driver error text and is returned to the
    client as-is.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

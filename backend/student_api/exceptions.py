"""
Student API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions tagged with an ErrorKind.
Why:   Services and auth code signal failures by raising; a single handler
       in main.py turns the kind into an HTTP status and JSON body. Route
       handlers never build error responses themselves.
How:   Each exception carries a kind, a client-facing message and an optional
       context dict that is logged but never returned.

Exception Hierarchy:
    StudentApiError (base)
    ├── ValidationError       → 400 missing/invalid input
    ├── MalformedIdError      → 400 id is not a valid ObjectId
    ├── AlreadyExistsError    → 400 duplicate registration
    ├── UnauthenticatedError  → 401 missing token or bad credentials
    │   └── InvalidToken      → 401 bad signature, malformed or expired
    ├── NotFoundError         → 404
    └── InternalError         → 500 storage failure, detail echoed to client
"""

import enum
from typing import Any, Dict, Optional


class ErrorKind(str, enum.Enum):
    """Tag for every failure a request can end in, with its HTTP status."""

    VALIDATION = "validation_error"
    MALFORMED_ID = "malformed_id"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INTERNAL = "internal_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.MALFORMED_ID: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 400,
    ErrorKind.INTERNAL: 500,
}


class StudentApiError(Exception):
    """
    Base exception for all Student API errors.

    Attributes:
        kind:     ErrorKind used by the central handler to pick the status
        message:  Client-facing description (returned in the response body)
        context:  Extra debug info (logged, NOT returned)
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_body(self) -> Dict[str, Any]:
        """JSON body sent to the client."""
        return {"message": self.message}


class ValidationError(StudentApiError):
    """
    Raised when the request body is missing a required field or cannot be
    decoded. Presence is the only rule: falsy values count as absent.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "All fields are required",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MalformedIdError(StudentApiError):
    """Raised when a path id is not a 24-character hex ObjectId."""

    kind = ErrorKind.MALFORMED_ID

    def __init__(
        self,
        resource: str = "resource",
        raw_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message=f"Invalid {resource} id", context=ctx)


class AlreadyExistsError(StudentApiError):
    """Raised when registering an email that already has a user."""

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(
        self,
        message: str = "User already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthenticatedError(StudentApiError):
    """
    Raised when a protected route is called without a usable bearer token,
    or when login credentials do not match.

    Login failures use one message for both "no such user" and "wrong
    password" so the response does not reveal which check failed.
    """

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(
        self,
        message: str = "Invalid credentials",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidToken(UnauthenticatedError):
    """Raised by TokenService.verify for bad signatures, garbage and expiry."""

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StudentApiError):
    """Raised when a well-formed id matches no document."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource.capitalize()} not found", context=ctx)


class InternalError(StudentApiError):
    """
    Raised when a database round trip fails.

    The raw driver error text is echoed to the client in the `error` field.
    """

    kind = ErrorKind.INTERNAL

    def __init__(
        self,
        detail: str = "",
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.detail = detail

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.detail}

"""
Catalog API — Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for the three failure classes a request
       can end in.
How:   Each exception carries a client-facing message and optional details.
       Global exception handlers (registered in main.py) turn them into
       `{"error": ..., "details": ...}` JSON bodies with the matching status code.
Who:   Raised by the persistence handle, the query builder and route helpers;
       caught by the global handlers.

Exception Hierarchy:
    CatalogAPIError (base)
    ├── ValidationError   → 400 Bad Request (malformed ID, short search term, bad page size)
    ├── NotFoundError     → 404 Not Found   (well-formed ID, no matching row)
    └── DatabaseError     → 500 Internal Server Error (any persistence failure)

There is no retry path: a DatabaseError surfaces immediately to the caller.
"""

from typing import Any, Dict, Optional


class CatalogAPIError(Exception):
    """
    Base exception for all Catalog API errors.

    Attributes:
        message:  Client-facing error description, returned as `error`
        details:  Optional extra text, returned as `details` when present
        context:  Debug info that is logged but never returned
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(self.message)

    def to_body(self) -> Dict[str, str]:
        """Serializes the error as `{error, details?}`."""
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(CatalogAPIError):
    """
    Raised when a caller-supplied parameter fails a syntactic check.

    HTTP: 400 Bad Request

    Example response:
        {"error": "Invalid episode ID"}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, details=details, context=ctx)
        self.field = field


class NotFoundError(CatalogAPIError):
    """
    Raised when a well-formed ID matches no row.

    HTTP: 404 Not Found

    Repositories return None for missing rows; route handlers convert that
    None into this exception. The message names the resource only:
        {"error": "Product not found"}
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource


class DatabaseError(CatalogAPIError):
    """
    Raised when executing a statement fails for any reason.

    HTTP: 500 Internal Server Error

    What:  Malformed SQL, lost connection, locked database, constraint failure.
    How:   The persistence handle wraps the driver/SQLAlchemy exception and keeps
           its text in `details`. Route handlers replace `message` with an
           endpoint-specific one ("Failed to fetch episodes") on the way out.

    Example response:
        {"error": "Failed to fetch episodes", "details": "no such table: episodes"}
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, context=context)

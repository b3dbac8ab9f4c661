"""
Maison Catalog API: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions mapped to HTTP status codes.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers (registered in main.py) turn them into structured
       JSON error bodies; the context is logged, never returned for 5xx errors.
Who:   Raised by services; caught by the handlers in main.py.

Exception Hierarchy:
    MaisonError (base)
    ├── ValidationError   → 400 Bad Request (missing files, bad form fields)
    ├── NotFoundError     → 404 Not Found (hero toggle on unknown id)
    ├── UploadError       → 500 Internal Server Error (image host rejected/failed)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class MaisonError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but not returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MaisonError):
    """
    Raised when client input fails validation.

    When:    No image on a create, too many images, blank required form
             fields, numeric fields that do not parse.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "No images uploaded",
            "details": {"field": "images"}
        }
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


class NotFoundError(MaisonError):
    """
    Raised when a requested resource does not exist.

    Only the hero image toggle surfaces this; product update and the two
    deletes report absence through their normal success shape.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class UploadError(MaisonError):
    """
    Raised when the image host rejects a payload or the transfer fails.

    The adapter performs no local checks, so this also covers content the
    host refuses (unsupported format, oversize file).
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Image upload failed. Please try again.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(MaisonError):
    """
    Raised when a store operation fails unexpectedly.

    The message returned to the client is always generic; the driver error
    is logged server-side only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

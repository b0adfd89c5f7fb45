"""
Bookmarks Service — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for every failure mode of the
       bookmarks resource.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) turn them
       into `{"error": {"message": ...}}` responses with the right status.
Who:   Raised by the validator, the bookmark service and the storage layer.

Exception Hierarchy:
    BookmarksError (base)
    ├── ValidationError            → 400 Bad Request
    │   ├── MissingFieldError      → 400 "'<field>' is required"
    │   ├── InvalidRatingError     → 400 rating outside 0..5 / not an integer
    │   ├── InvalidUrlError        → 400 not an absolute http(s) URL
    │   ├── InvalidTextError       → 400 title/description not a string
    │   └── EmptyPatchError        → 400 patch without title/url/rating
    ├── NotFoundError              → 404 Not Found
    ├── AuthenticationError        → 401 Unauthorized
    └── StorageError               → 500 Internal Server Error

Validation errors short-circuit: the first failing field is raised, and
callers (and tests) can rely on `exc.field` naming it.
"""

from typing import Any, Dict, Optional


class BookmarksError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Client-facing description (safe to return in API response)
        context:  Debug info for the logs, never returned to the client
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookmarksError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request

    Example response:
        {"error": {"message": "'title' is required"}}
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


class MissingFieldError(ValidationError):
    """A required field is absent, null or blank."""

    def __init__(self, field: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=f"'{field}' is required", field=field, context=context)


class InvalidRatingError(ValidationError):
    """The rating is not an integer in the closed range [0, 5]."""

    def __init__(self, value: Any = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["value"] = value
        super().__init__(
            message="'rating' must be a number between 0 and 5",
            field="rating",
            context=ctx,
        )


class InvalidUrlError(ValidationError):
    """The url is not a well-formed absolute http/https URL."""

    def __init__(self, value: Any = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["value"] = value
        super().__init__(message="'url' must be a valid URL", field="url", context=ctx)


class InvalidTextError(ValidationError):
    """A title or description that is not a JSON string."""

    def __init__(self, field: str, value: Any = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["value_type"] = type(value).__name__
        super().__init__(message=f"'{field}' must be a string", field=field, context=ctx)


class EmptyPatchError(ValidationError):
    """
    A patch body names none of the mutable required fields.

    Raised even when the body carries other keys: unrecognized fields (and a
    lone `description`) never count as an update.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Request body must contain either 'title', 'url', or 'rating'",
            context=context,
        )


class NotFoundError(BookmarksError):
    """
    Raised when a requested bookmark does not exist.

    HTTP: 404 Not Found

    The storage layer returns None for missing rows; the service converts
    that into this exception so routes stay free of existence checks. The
    client message is fixed; the id only goes to the logs.
    """

    def __init__(
        self,
        resource: str = "Bookmark",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} Not Found", context=ctx)
        self.resource_id = resource_id


class AuthenticationError(BookmarksError):
    """
    Raised by the auth gate when the bearer token is missing or wrong.

    HTTP: 401 Unauthorized
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Unauthorized request", context=context)


class StorageError(BookmarksError):
    """
    Raised when a storage operation fails unexpectedly.

    HTTP: 500 Internal Server Error

    Security Note:
        The client always receives a generic message. The original error type
        and the offending id are kept in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

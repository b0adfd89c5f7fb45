"""
Bookmarks Service — Pydantic Response Schemas
===============================================

What:  Pydantic models for what the API returns.
How:   FastAPI serializes route results through these models and lists them
       in the OpenAPI document.

Design Decision:
    Request bodies are NOT modelled here. Incoming payloads are plain JSON
    objects checked by `services.validation`, because the error contract
    (first missing field in a fixed order, fixed messages) is stricter than
    Pydantic's collected 422 error list.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookmarkResponse(BaseModel):
    """
    Full representation of a stored bookmark.

    Returned by GET /bookmarks (as list items), GET /bookmarks/{id} and
    POST /bookmarks. `title` and `description` are always sanitized.
    """
    id: int = Field(description="Identifier assigned by storage on creation")
    title: str = Field(description="Bookmark title (sanitized)")
    url: str = Field(description="Absolute http(s) URL")
    description: Optional[str] = Field(
        default=None,
        description="Free-form description (sanitized); null when absent",
    )
    rating: int = Field(ge=0, le=5, description="Integer rating between 0 and 5")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {"error": {"message": "'url' must be a valid URL"}}
    """
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

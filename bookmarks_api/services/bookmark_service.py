"""
Bookmarks Service — Bookmark Service (Resource Handler)
=========================================================

What:  Lifecycle and orchestration for the bookmarks resource: existence
       checks, validation, sanitization, storage calls and audit logging.
How:   Each method receives the BookmarkStore for the current request and
       raises application exceptions; routes map results to HTTP.
Who:   Called by the /bookmarks route handlers.

Per-id state machine:
    Absent ──create──▶ Present ──delete──▶ Absent
                       Present ──update──▶ Present

    get / delete / update on an Absent id raise NotFoundError before any
    validation or write happens.

Sanitization:
    title and description are sanitized before they are written and again
    whenever a row is turned into a response. The sanitizer is idempotent,
    so rows written by other tools are also safe on output.

Audit log:
    Successful create / update / delete → INFO with resource, id and action.
    Validation and not-found failures    → WARNING with the field or id.

Design Decision:
    BookmarkService holds no state; the store comes in with every call.
    Concurrent requests share the singleton safely.
"""

import logging
from typing import Any, Dict, List, Tuple

from bookmarks_api.exceptions import NotFoundError, ValidationError
from bookmarks_api.schemas.bookmark import BookmarkResponse
from bookmarks_api.services.sanitizer import sanitize_text
from bookmarks_api.services.validation import validate_create, validate_patch
from bookmarks_api.storage.base import BookmarkRow, BookmarkStore

logger = logging.getLogger(__name__)

RESOURCE = "bookmark"
SANITIZED_FIELDS = ("title", "description")


def _sanitize_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    cleaned = dict(fields)
    for field in SANITIZED_FIELDS:
        if field in cleaned:
            cleaned[field] = sanitize_text(cleaned[field])
    return cleaned


def serialize_bookmark(row: BookmarkRow) -> BookmarkResponse:
    """Build the API representation of a stored row, sanitizing text fields."""
    return BookmarkResponse(
        id=row["id"],
        title=sanitize_text(row["title"]),
        url=row["url"],
        description=sanitize_text(row.get("description")),
        rating=int(row["rating"]),
    )


def bookmark_location(bookmark_id: int) -> str:
    return f"/bookmarks/{bookmark_id}"


def _audit(action: str, bookmark_id: int) -> None:
    logger.info(
        "Bookmark with id %s %s.",
        bookmark_id,
        action,
        extra={"resource": RESOURCE, "bookmark_id": bookmark_id, "action": action},
    )


class BookmarkService:
    """
    Business logic layer for bookmark operations.

    Responsibilities:
        - list_bookmarks(): every bookmark, storage order
        - get_bookmark(): single bookmark or NotFoundError
        - create_bookmark(): validate → sanitize → insert
        - delete_bookmark(): existence check → delete
        - update_bookmark(): existence check → validate → sanitize → merge
    """

    async def list_bookmarks(self, store: BookmarkStore) -> List[BookmarkResponse]:
        rows = await store.list_all()
        return [serialize_bookmark(row) for row in rows]

    async def get_bookmark(self, store: BookmarkStore, bookmark_id: int) -> BookmarkResponse:
        """
        Raises:
            NotFoundError: no bookmark with this id (→ 404)
        """
        row = await self._require_present(store, bookmark_id)
        return serialize_bookmark(row)

    async def create_bookmark(
        self,
        store: BookmarkStore,
        payload: Any,
    ) -> Tuple[BookmarkResponse, str]:
        """
        Validate and insert a new bookmark.

        Returns:
            (stored bookmark, location path "/bookmarks/{id}")

        Raises:
            ValidationError (and subclasses): payload rejected, nothing written
            StorageError: insert failed
        """
        try:
            fields = validate_create(payload)
        except ValidationError as e:
            logger.warning(
                "Rejected bookmark create: %s",
                e.message,
                extra={"resource": RESOURCE, "field": e.field, "action": "create"},
            )
            raise

        row = await store.insert(_sanitize_fields(fields))
        _audit("created", row["id"])
        return serialize_bookmark(row), bookmark_location(row["id"])

    async def delete_bookmark(self, store: BookmarkStore, bookmark_id: int) -> None:
        """
        Raises:
            NotFoundError: no bookmark with this id (→ 404)
        """
        await self._require_present(store, bookmark_id)
        await store.delete_by_id(bookmark_id)
        _audit("deleted", bookmark_id)

    async def update_bookmark(
        self,
        store: BookmarkStore,
        bookmark_id: int,
        payload: Any,
    ) -> None:
        """
        Apply a partial update. Fields not in the payload keep their values.

        The existence check runs first, so a missing id is a 404 whatever
        the payload looks like.

        Raises:
            NotFoundError: no bookmark with this id (→ 404)
            ValidationError (and subclasses): payload rejected, nothing written
        """
        await self._require_present(store, bookmark_id)

        try:
            fields = validate_patch(payload)
        except ValidationError as e:
            logger.warning(
                "Rejected update of bookmark %s: %s",
                bookmark_id,
                e.message,
                extra={
                    "resource": RESOURCE,
                    "bookmark_id": bookmark_id,
                    "field": e.field,
                    "action": "update",
                },
            )
            raise

        await store.update_by_id(bookmark_id, _sanitize_fields(fields))
        _audit("updated", bookmark_id)

    async def _require_present(self, store: BookmarkStore, bookmark_id: int) -> BookmarkRow:
        row = await store.get_by_id(bookmark_id)
        if row is None:
            logger.warning(
                "Bookmark with id %s not found.",
                bookmark_id,
                extra={"resource": RESOURCE, "bookmark_id": bookmark_id},
            )
            raise NotFoundError(resource="Bookmark", resource_id=bookmark_id)
        return row


# Stateless; shared by all requests.
bookmark_service = BookmarkService()

"""
Bookmarks Service — Bookmark Route Handlers
=============================================

What:  The /bookmarks HTTP surface.

    GET    /bookmarks        → 200, list of bookmarks
    POST   /bookmarks        → 201, Location: /bookmarks/{id}, new bookmark
    GET    /bookmarks/{id}   → 200, bookmark                  | 404
    DELETE /bookmarks/{id}   → 204, empty body                 | 404
    PATCH  /bookmarks/{id}   → 204, empty body           | 400 | 404

How:   Every route sits behind `require_api_token`, extracts path and body,
       delegates to BookmarkService and sets status/headers. Errors are
       raised as application exceptions and rendered by the global handlers
       in main.py.

Ids outside 1..MAX_BOOKMARK_ID fail path validation and are answered like
any other unknown id (404), without reaching storage.

Bodies are taken as raw JSON (`Any`) so the validator, not Pydantic, decides
which error the client sees.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from bookmarks_api.dependencies import get_bookmark_store, require_api_token
from bookmarks_api.models.bookmark import MAX_BOOKMARK_ID
from bookmarks_api.schemas.bookmark import BookmarkResponse, ErrorResponse
from bookmarks_api.services.bookmark_service import bookmark_service
from bookmarks_api.storage.base import BookmarkStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookmarks",
    tags=["Bookmarks"],
    dependencies=[Depends(require_api_token)],
    responses={
        401: {"description": "Missing or invalid bearer token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)

_NOT_FOUND = {404: {"description": "Bookmark not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid bookmark payload", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[BookmarkResponse],
    summary="List all bookmarks",
)
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> List[BookmarkResponse]:
    return await bookmark_service.list_bookmarks(store)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BookmarkResponse,
    responses=_BAD_REQUEST,
    summary="Create a bookmark",
    description=(
        "Requires `title`, `url` (absolute http/https) and `rating` (integer 0-5); "
        "`description` is optional. The Location header points at the new bookmark."
    ),
)
async def create_bookmark(
    response: Response,
    payload: Any = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    bookmark, location = await bookmark_service.create_bookmark(store, payload)
    response.headers["Location"] = location
    return bookmark


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses=_NOT_FOUND,
    summary="Get a single bookmark by ID",
)
async def get_bookmark(
    bookmark_id: int = Path(ge=1, le=MAX_BOOKMARK_ID),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    return await bookmark_service.get_bookmark(store, bookmark_id)


@router.delete(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a bookmark",
)
async def delete_bookmark(
    bookmark_id: int = Path(ge=1, le=MAX_BOOKMARK_ID),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Response:
    await bookmark_service.delete_bookmark(store, bookmark_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Update some fields of a bookmark",
    description=(
        "Send any of `title`, `url`, `rating` (at least one) and optionally "
        "`description`. Fields not sent keep their current values."
    ),
)
async def update_bookmark(
    bookmark_id: int = Path(ge=1, le=MAX_BOOKMARK_ID),
    payload: Any = Body(default=None),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Response:
    await bookmark_service.update_bookmark(store, bookmark_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
Bookmarks Service — SQLAlchemy Bookmark Store
===============================================

What:  BookmarkStore implementation over the `bookmarks` table using an
       async SQLAlchemy session.
How:   One statement per operation. The session belongs to the request
       (see `database.get_db_session`), which commits or rolls back.
       Inserts and updates are flushed so ids and constraint violations
       surface inside the store, where they are wrapped in StorageError.

Query plans:
    list_all:     SELECT ... FROM bookmarks ORDER BY id
    get_by_id:    SELECT ... WHERE id = :id          (primary key lookup)
    insert:       INSERT ... RETURNING id             (via flush)
    delete_by_id: DELETE FROM bookmarks WHERE id = :id
    update_by_id: UPDATE bookmarks SET <fields> WHERE id = :id
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.exceptions import StorageError
from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.storage.base import BOOKMARK_COLUMNS, BookmarkRow, BookmarkStore

logger = logging.getLogger(__name__)


def _to_row(bookmark: Bookmark) -> BookmarkRow:
    return {column: getattr(bookmark, column) for column in BOOKMARK_COLUMNS}


class SQLAlchemyBookmarkStore(BookmarkStore):
    """
    Relational bookmark store.

    Error Handling Strategy:
        SQLAlchemy exceptions (connection loss, constraint violations) are
        logged with the offending id and re-raised as StorageError, which
        the global handler turns into a generic 500.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[BookmarkRow]:
        try:
            result = await self.session.execute(select(Bookmark).order_by(Bookmark.id))
            return [_to_row(bookmark) for bookmark in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing bookmarks: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve bookmarks. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def get_by_id(self, bookmark_id: int) -> Optional[BookmarkRow]:
        try:
            result = await self.session.execute(
                select(Bookmark).where(Bookmark.id == bookmark_id)
            )
            bookmark = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching bookmark %s: %s", bookmark_id, str(e))
            raise StorageError(
                message="Could not retrieve the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id, "error_type": type(e).__name__},
            ) from e

        return _to_row(bookmark) if bookmark is not None else None

    async def insert(self, fields: Dict[str, Any]) -> BookmarkRow:
        bookmark = Bookmark(
            title=fields["title"],
            url=fields["url"],
            description=fields.get("description"),
            rating=fields["rating"],
        )
        try:
            self.session.add(bookmark)
            await self.session.flush()  # assigns the id without committing
        except SQLAlchemyError as e:
            logger.error("Database error inserting bookmark: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not save the bookmark. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return _to_row(bookmark)

    async def delete_by_id(self, bookmark_id: int) -> int:
        try:
            result = await self.session.execute(
                delete(Bookmark).where(Bookmark.id == bookmark_id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error deleting bookmark %s: %s", bookmark_id, str(e))
            raise StorageError(
                message="Could not delete the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id, "error_type": type(e).__name__},
            ) from e

        return result.rowcount or 0

    async def update_by_id(self, bookmark_id: int, fields: Dict[str, Any]) -> int:
        values = {key: value for key, value in fields.items() if key in BOOKMARK_COLUMNS and key != "id"}
        if not values:
            return 0

        try:
            result = await self.session.execute(
                update(Bookmark)
                .where(Bookmark.id == bookmark_id)
                .values(**values)
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating bookmark %s: %s", bookmark_id, str(e))
            raise StorageError(
                message="Could not update the bookmark. Please try again.",
                context={"bookmark_id": bookmark_id, "error_type": type(e).__name__},
            ) from e

        return result.rowcount or 0

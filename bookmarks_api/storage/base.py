"""
Bookmarks Service — Abstract Bookmark Store Interface
=======================================================

What:  Abstract base class defining the storage contract the bookmark
       service depends on.
How:   Concrete stores inherit from BookmarkStore and implement the five
       single-row/single-statement operations below.
Who:   Called by BookmarkService; implemented by SQLAlchemyBookmarkStore and
       by the in-memory fake used in the test suite.

Contract:
    - Rows are plain dicts with exactly: id, title, url, description, rating
    - `insert` assigns the id; callers never supply one
    - Each operation is atomic on its own; the store offers no multi-step
      transactions and the service never asks for one
    - Unexpected backend failures surface as StorageError
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

BookmarkRow = Dict[str, Any]

BOOKMARK_COLUMNS = ("id", "title", "url", "description", "rating")


class BookmarkStore(ABC):
    """Opaque key-by-id table of bookmarks."""

    @abstractmethod
    async def list_all(self) -> List[BookmarkRow]:
        """
        Return every bookmark in the store's natural order (ascending id,
        i.e. insertion order). An empty table yields an empty list.
        """
        ...

    @abstractmethod
    async def get_by_id(self, bookmark_id: int) -> Optional[BookmarkRow]:
        """Return the bookmark with `bookmark_id`, or None when absent."""
        ...

    @abstractmethod
    async def insert(self, fields: Dict[str, Any]) -> BookmarkRow:
        """
        Insert a new bookmark and return the stored row, including the
        freshly assigned id.

        Args:
            fields: title, url, description, rating (already validated)
        """
        ...

    @abstractmethod
    async def delete_by_id(self, bookmark_id: int) -> int:
        """Delete the bookmark; returns the number of rows removed (0 or 1)."""
        ...

    @abstractmethod
    async def update_by_id(self, bookmark_id: int, fields: Dict[str, Any]) -> int:
        """
        Overwrite only the given columns of one bookmark.

        Columns not named in `fields` keep their stored values. Returns the
        number of rows updated (0 or 1).
        """
        ...

# Storage package init
"""
Bookmarks Service — Storage Layer
===================================

What:  Persistence behind a narrow interface.

Store Inventory:
    - BookmarkStore (abstract): list_all / get_by_id / insert / delete_by_id / update_by_id
    - SQLAlchemyBookmarkStore: async SQLAlchemy implementation over `bookmarks`

The service layer only ever sees BookmarkStore, so tests swap in an
in-memory fake through FastAPI's dependency overrides.
"""

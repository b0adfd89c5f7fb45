"""
Bookmarks Service — Application Package Initializer
====================================================

What: Marks `bookmarks_api` as a Python package and carries the service version.
Who:  Imported by uvicorn (`bookmarks_api.main:app`), Alembic and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth gate
    ├─────────────────────────────────────┤
    │   Services (validation, handler)    │  ← Field rules, lifecycle, audit log
    ├─────────────────────────────────────┤
    │     Storage (BookmarkStore ABC)     │  ← list / get / insert / delete / update
    ├─────────────────────────────────────┤
    │   Models & Database (SQLAlchemy)    │  ← `bookmarks` table, async sessions
    └─────────────────────────────────────┘

    Services never import SQLAlchemy: they receive a BookmarkStore and can be
    exercised against an in-memory fake.
"""

__version__ = "1.0.0"

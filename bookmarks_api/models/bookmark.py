"""
Bookmarks Service — Bookmark SQLAlchemy Model
===============================================

What:  ORM model representing the `bookmarks` table.
Who:   Used by SQLAlchemyBookmarkStore for CRUD and by Alembic for migrations.

Table Design:
    - Integer auto-increment primary key: ids are assigned by the database
      on insert and never change afterwards.
    - title: TEXT, NOT NULL. Stored already sanitized; escaping makes it
      longer than the client value, so it has no length cap.
    - url: TEXT, NOT NULL. Validated as an absolute http(s) URL before write.
    - description: TEXT, nullable. Stored already sanitized.
    - rating: INTEGER, NOT NULL, CHECK 0..5. The check duplicates the
      validator's range rule at the database level.

    Column types are dialect-neutral so the same model runs on PostgreSQL in
    production and on SQLite in the test suite.
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookmarks_api.database import Base

# Largest id an INTEGER primary key can hold on PostgreSQL.
MAX_BOOKMARK_ID = 2**31 - 1


class Bookmark(Base):
    """
    A saved link with a title, optional description and a 0-5 rating.

    Lifecycle:
        1. Inserted by POST /bookmarks (id assigned here)
        2. Patched field by field by PATCH /bookmarks/{id}
        3. Removed by DELETE /bookmarks/{id}; no other table references it
    """

    __tablename__ = "bookmarks"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id}, title='{self.title}', rating={self.rating})>"

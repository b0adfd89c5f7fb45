"""Create bookmarks table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `bookmarks` table.
How:   Integer auto-increment id, text columns, and a CHECK keeping rating
       within 0..5. See bookmarks_api/models/bookmark.py.

Rollback: downgrade() drops the table (all bookmarks are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookmarks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "rating >= 0 AND rating <= 5",
            name="ck_bookmarks_rating_range",
        ),
    )


def downgrade() -> None:
    op.drop_table("bookmarks")

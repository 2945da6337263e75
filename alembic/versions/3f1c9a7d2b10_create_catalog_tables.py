"""create book, rating and review tables

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 10:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "book",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("author", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("genre", sa.String(), nullable=False),
        sa.Column("publish_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_book_title", "book", ["title"])
    op.create_index("ix_book_author", "book", ["author"])
    op.create_index("ix_book_genre", "book", ["genre"])
    op.create_index("ix_book_publish_date", "book", ["publish_date"])

    op.create_table(
        "rating",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "book_id",
            sa.Integer(),
            sa.ForeignKey("book.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "book_id", name="uk_user_book_rating"),
    )
    op.create_index("ix_rating_book_id", "rating", ["book_id"])

    op.create_table(
        "review",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "book_id",
            sa.Integer(),
            sa.ForeignKey("book.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("comment", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("user_id", "book_id", name="uk_user_book_review"),
    )
    op.create_index("ix_review_book_id", "review", ["book_id"])


def downgrade() -> None:
    op.drop_index("ix_review_book_id", table_name="review")
    op.drop_table("review")
    op.drop_index("ix_rating_book_id", table_name="rating")
    op.drop_table("rating")
    op.drop_index("ix_book_publish_date", table_name="book")
    op.drop_index("ix_book_genre", table_name="book")
    op.drop_index("ix_book_author", table_name="book")
    op.drop_index("ix_book_title", table_name="book")
    op.drop_table("book")

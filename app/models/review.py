from sqlmodel import SQLModel, Field
from sqlalchemy import Text, UniqueConstraint
from typing import Optional
from datetime import datetime

from app.models.base import timestamp_field


class Review(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uk_user_book_review"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int
    book_id: int = Field(foreign_key="book.id", ondelete="CASCADE", index=True)
    # length is bounded by settings.REVIEW_MAX_LENGTH, not by the column
    comment: str = Field(sa_type=Text)
    created_at: datetime = timestamp_field()

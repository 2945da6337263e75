from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional
from datetime import datetime

from app.models.base import timestamp_field


class Rating(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uk_user_book_rating"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int
    book_id: int = Field(foreign_key="book.id", ondelete="CASCADE", index=True)
    rating: int  # 1..5
    created_at: datetime = timestamp_field()

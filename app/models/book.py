from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import date, datetime

from app.models.base import timestamp_field


class Book(SQLModel, table=True):
    #main info
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    author: str = Field(index=True)
    description: Optional[str] = None
    genre: str = Field(index=True)
    publish_date: Optional[date] = Field(default=None, index=True)

    #timestamps
    created_at: datetime = timestamp_field()
    updated_at: datetime = timestamp_field()

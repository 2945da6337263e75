from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional, List
from dataclasses import dataclass, fields
from datetime import date, datetime

from app.models.base import as_utc


class _Unset:
    """Marker for a partial-update field the caller did not supply."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET: Any = _Unset()


class BookCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    author: str = Field(..., min_length=1, max_length=255)

    # optional
    description: Optional[str] = None

    genre: str = Field(..., min_length=1, max_length=100)
    publish_date: date

    @field_validator("title", "author", "genre")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


@dataclass(frozen=True)
class BookChanges:
    """Partial update of a book. Every attribute left at ``UNSET`` keeps
    the stored value; ``None`` is an explicit clear."""

    title: Any = UNSET
    author: Any = UNSET
    description: Any = UNSET
    genre: Any = UNSET
    publish_date: Any = UNSET

    def supplied(self) -> dict:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


class BookUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    author: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    genre: Optional[str] = Field(None, min_length=1, max_length=100)
    publish_date: Optional[date] = None

    def to_changes(self) -> BookChanges:
        # fields the client actually sent, explicit nulls included
        return BookChanges(**{name: getattr(self, name) for name in self.model_fields_set})


class BookRead(BaseModel):
    id: int
    title: str
    author: str
    description: Optional[str]
    genre: str
    publish_date: Optional[date]

    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def stamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class BookPage(BaseModel):
    items: List[BookRead]
    total: int
    page: int
    size: int
    total_pages: int

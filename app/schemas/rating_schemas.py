from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime

from app.models.base import as_utc


class RatingCreate(BaseModel):
    # range is checked by the rating service so every caller gets the same error
    rating: int


class RatingRead(BaseModel):
    id: int
    user_id: int
    book_id: int
    rating: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def stamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class TopRatedBook(BaseModel):
    book_id: int
    title: str
    author: str
    genre: str
    average_rating: float
    rating_count: int

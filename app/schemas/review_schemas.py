from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime

from app.config import settings
from app.models.base import as_utc


class ReviewCreate(BaseModel):
    comment: str = Field(..., min_length=1, max_length=settings.REVIEW_MAX_LENGTH)


class ReviewRead(BaseModel):
    id: int
    user_id: int
    book_id: int
    comment: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def stamp_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

# app/models/base.py
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Backends without tz support (SQLite) hand timestamps back naive; they
    were written as UTC, so tag them as such."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def timestamp_field():
    return Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

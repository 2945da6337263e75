from fastapi import Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.sql import SqlCatalogStore


def get_store(session: Session = Depends(get_session)) -> SqlCatalogStore:
    return SqlCatalogStore(session)

from typing import List

from fastapi import APIRouter, Depends

from app.config import settings
from app.dependencies.identity import get_current_user_id
from app.dependencies.store import get_store
from app.repositories.sql import SqlCatalogStore
from app.schemas.rating_schemas import RatingCreate, RatingRead, TopRatedBook
from app.services import rating_service

router = APIRouter()


@router.post("/books/rating/{book_id}", response_model=RatingRead)
def add_or_update_rating(
    book_id: int,
    data: RatingCreate,
    user_id: int = Depends(get_current_user_id),
    store: SqlCatalogStore = Depends(get_store),
):
    return rating_service.upsert_rating(store, book_id, user_id, data.rating)


@router.get("/genres/top-rated/{genre}", response_model=List[TopRatedBook])
def top_rated_by_genre(
    genre: str,
    limit: int = settings.TOP_RATED_DEFAULT_LIMIT,
    store: SqlCatalogStore = Depends(get_store),
):
    return rating_service.top_rated_by_genre(store, genre, limit)

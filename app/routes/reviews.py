from fastapi import APIRouter, Depends, status

from app.dependencies.identity import get_current_user_id
from app.dependencies.store import get_store
from app.repositories.sql import SqlCatalogStore
from app.schemas.review_schemas import ReviewCreate, ReviewRead
from app.services import review_service

router = APIRouter()


@router.post(
    "/reviews/{book_id}",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
)
def add_review(
    book_id: int,
    data: ReviewCreate,
    user_id: int = Depends(get_current_user_id),
    store: SqlCatalogStore = Depends(get_store),
):
    return review_service.add_review(store, book_id, user_id, data.comment)

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.config import settings
from app.dependencies.store import get_store
from app.filters.book_filters import BookSearchCriteria
from app.repositories.sql import SqlCatalogStore
from app.schemas.book_schemas import BookCreate, BookPage, BookRead, BookUpdate
from app.services import book_service

router = APIRouter()


# ---------- SEARCH BOOKS ----------
@router.get("/search", response_model=BookPage, summary="Search books with optional filters")
def search_books(
    title: Optional[str] = None,
    author: Optional[str] = None,
    genre: Optional[str] = None,
    publish_date_from: Optional[date] = Query(None, alias="publishDateFrom"),
    publish_date_to: Optional[date] = Query(None, alias="publishDateTo"),
    page: int = 0,
    size: int = settings.DEFAULT_PAGE_SIZE,
    sort: Optional[List[str]] = Query(None, description="field[,asc|desc], repeatable"),
    store: SqlCatalogStore = Depends(get_store),
):
    criteria = BookSearchCriteria(
        title=title,
        author=author,
        genre=genre,
        publish_date_from=publish_date_from,
        publish_date_to=publish_date_to,
    )
    return book_service.search_books(store, criteria, page=page, size=size, sort=sort)


@router.post("", response_model=BookRead, status_code=status.HTTP_201_CREATED)
def create_book(
    data: BookCreate,
    response: Response,
    store: SqlCatalogStore = Depends(get_store),
):
    created = book_service.create_book(store, data)
    response.headers["Location"] = f"/api/v1/books/{created.id}"
    return created


@router.get("/{book_id}", response_model=BookRead)
def get_book(book_id: int, store: SqlCatalogStore = Depends(get_store)):
    return book_service.get_book(store, book_id)


@router.put("/{book_id}", response_model=BookRead)
def update_book(
    book_id: int,
    data: BookUpdate,
    store: SqlCatalogStore = Depends(get_store),
):
    return book_service.update_book(store, book_id, data.to_changes())


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, store: SqlCatalogStore = Depends(get_store)):
    book_service.delete_book(store, book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# app/services/book_service.py
import logging
from typing import Optional, Sequence

from app.config import settings
from app.exceptions import InvalidArgumentError, NotFoundError
from app.filters.book_filters import BookSearchCriteria, build_book_predicate
from app.models.book import Book
from app.repositories.base import CatalogStore
from app.schemas.book_schemas import BookChanges, BookCreate, BookPage, BookRead
from app.utils.pagination import check_page, total_pages
from app.utils.sorting import parse_sort

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "author", "genre")


def _load_book(store: CatalogStore, book_id: int, action: str) -> Book:
    book = store.books.get(book_id)
    if book is None:
        logger.warning(f"{action}: not found id={book_id}")
        raise NotFoundError(f"Book not found with id: {book_id}")
    return book


def create_book(store: CatalogStore, data: BookCreate) -> BookRead:
    logger.info(f"create_book: title='{data.title}', author='{data.author}'")

    book = Book(
        title=data.title,
        author=data.author,
        description=data.description,
        genre=data.genre,
        publish_date=data.publish_date,
    )
    saved = store.books.save(book)

    logger.info(f"create_book: saved id={saved.id}")
    return BookRead.model_validate(saved)


def get_book(store: CatalogStore, book_id: int) -> BookRead:
    logger.debug(f"get_book: id={book_id}")
    return BookRead.model_validate(_load_book(store, book_id, "get_book"))


def update_book(store: CatalogStore, book_id: int, changes: BookChanges) -> BookRead:
    supplied = changes.supplied()
    logger.info(f"update_book: id={book_id}, fields={sorted(supplied)}")

    book = _load_book(store, book_id, "update_book")

    for name in REQUIRED_FIELDS:
        if name in supplied and (supplied[name] is None or not str(supplied[name]).strip()):
            raise InvalidArgumentError(f"{name} must not be blank")

    for name, value in supplied.items():
        setattr(book, name, value)

    updated = store.books.save(book)
    logger.info(f"update_book: updated id={updated.id}")
    return BookRead.model_validate(updated)


def delete_book(store: CatalogStore, book_id: int) -> None:
    logger.info(f"delete_book: id={book_id}")

    if not store.books.delete_by_id(book_id):
        logger.warning(f"delete_book: not found id={book_id}")
        raise NotFoundError(f"Book not found with id: {book_id}")

    logger.info(f"delete_book: deleted id={book_id}")


def search_books(
    store: CatalogStore,
    criteria: BookSearchCriteria,
    page: int = 0,
    size: int = settings.DEFAULT_PAGE_SIZE,
    sort: Optional[Sequence[str]] = None,
) -> BookPage:
    page, size = check_page(page, size)
    orders = parse_sort(sort)
    predicate = build_book_predicate(criteria)

    logger.debug(
        f"search_books: {criteria}, page={page}, size={size}, sort={orders}"
    )

    books, total = store.books.query(predicate, page, size, orders)

    logger.debug(f"search_books: returned {len(books)}, total={total}")
    return BookPage(
        items=[BookRead.model_validate(b) for b in books],
        total=total,
        page=page,
        size=size,
        total_pages=total_pages(total, size),
    )

# app/services/review_service.py
import logging

from app.config import settings
from app.exceptions import ConflictError, InvalidArgumentError, NotFoundError, UnexpectedError
from app.models.base import utcnow
from app.models.review import Review
from app.repositories.base import CatalogStore, DuplicateKeyError
from app.schemas.review_schemas import ReviewRead

logger = logging.getLogger(__name__)


def _conflict(book_id: int, user_id: int) -> ConflictError:
    logger.warning(f"add_review: duplicate attempt book_id={book_id} user_id={user_id}")
    return ConflictError(
        f"Review already exists for this user and book (user_id={user_id}, book_id={book_id})"
    )


def add_review(store: CatalogStore, book_id: int, user_id: int, comment: str) -> ReviewRead:
    """Create the single review ``user_id`` may leave on a book.

    Reviews are immutable: a second attempt is a conflict, never an overwrite.
    """
    logger.info(f"add_review: book_id={book_id} user_id={user_id}")

    if not comment or not comment.strip():
        raise InvalidArgumentError("comment must not be blank")
    if len(comment) > settings.REVIEW_MAX_LENGTH:
        raise InvalidArgumentError(
            f"comment must be at most {settings.REVIEW_MAX_LENGTH} characters"
        )

    if not store.books.exists_by_id(book_id):
        logger.warning(f"add_review: book not found id={book_id}")
        raise NotFoundError(f"Book not found: {book_id}")

    if store.reviews.find_by_natural_key(user_id, book_id) is not None:
        raise _conflict(book_id, user_id)

    try:
        saved = store.reviews.save(
            Review(user_id=user_id, book_id=book_id, comment=comment, created_at=utcnow())
        )
    except DuplicateKeyError as e:
        # lost the race to a concurrent insert for the same pair
        if store.reviews.find_by_natural_key(user_id, book_id) is not None:
            raise _conflict(book_id, user_id) from e
        raise UnexpectedError() from e

    return ReviewRead.model_validate(saved)

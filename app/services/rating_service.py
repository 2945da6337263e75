# app/services/rating_service.py
import logging
from typing import List

from app.config import settings
from app.exceptions import InvalidArgumentError, NotFoundError, UnexpectedError
from app.models.base import utcnow
from app.models.rating import Rating
from app.repositories.base import CatalogStore, DuplicateKeyError
from app.schemas.rating_schemas import RatingRead, TopRatedBook

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def clamp_limit(limit: int) -> int:
    return max(1, min(limit, settings.TOP_RATED_MAX_LIMIT))


def upsert_rating(store: CatalogStore, book_id: int, user_id: int, value: int) -> RatingRead:
    """Add or update ``user_id``'s rating of a book.

    Keyed by (user_id, book_id): the first call inserts, later calls
    overwrite the value and keep the original ``created_at``. An insert
    that loses a race against a concurrent one falls back to updating
    the row that won.
    """
    logger.info(f"upsert_rating: book_id={book_id} user_id={user_id} rating={value}")

    if value is None or not MIN_RATING <= value <= MAX_RATING:
        raise InvalidArgumentError(
            f"rating must be between {MIN_RATING} and {MAX_RATING}, got {value}"
        )

    if not store.books.exists_by_id(book_id):
        logger.warning(f"upsert_rating: book not found id={book_id}")
        raise NotFoundError(f"Book not found: {book_id}")

    existing = store.ratings.find_by_natural_key(user_id, book_id)
    if existing is not None:
        existing.rating = value
        return RatingRead.model_validate(store.ratings.save(existing))

    try:
        saved = store.ratings.save(
            Rating(user_id=user_id, book_id=book_id, rating=value, created_at=utcnow())
        )
    except DuplicateKeyError as e:
        logger.info(f"upsert_rating: concurrent insert for user_id={user_id} book_id={book_id}, updating")
        winner = store.ratings.find_by_natural_key(user_id, book_id)
        if winner is None:
            raise UnexpectedError() from e
        winner.rating = value
        saved = store.ratings.save(winner)

    return RatingRead.model_validate(saved)


def top_rated_by_genre(store: CatalogStore, genre: str, limit: int) -> List[TopRatedBook]:
    """Books of ``genre`` ranked by average rating, then rating count.

    Unrated books never appear. ``limit`` is clamped to [1, TOP_RATED_MAX_LIMIT].
    """
    safe_limit = clamp_limit(limit)
    logger.debug(f"top_rated_by_genre: genre='{genre}' limit={limit} safe_limit={safe_limit}")
    return store.ratings.top_rated_by_genre(genre.strip(), safe_limit)

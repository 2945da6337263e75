# app/repositories/sql.py
import logging
from contextlib import contextmanager
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from app.exceptions import UnexpectedError
from app.filters.book_filters import BookPredicate
from app.models.base import utcnow
from app.models.book import Book
from app.models.rating import Rating
from app.models.review import Review
from app.repositories import base
from app.repositories.base import DuplicateKeyError
from app.schemas.rating_schemas import TopRatedBook
from app.utils.pagination import paginate
from app.utils.sorting import SortOrder

logger = logging.getLogger(__name__)


class SqlRepository:
    model = None

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _store_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Store call failed for {self.model.__name__}: {action}", exc_info=e)
            raise UnexpectedError() from e

    def get(self, entity_id: int):
        with self._store_errors("get"):
            return self.session.get(self.model, entity_id)

    def exists_by_id(self, entity_id: int) -> bool:
        with self._store_errors("exists_by_id"):
            found = self.session.exec(
                select(self.model.id).where(self.model.id == entity_id)
            ).first()
        return found is not None

    def save(self, entity):
        self.session.add(entity)
        self._commit()
        with self._store_errors("refresh"):
            self.session.refresh(entity)
        return entity

    def delete_by_id(self, entity_id: int) -> bool:
        entity = self.get(entity_id)
        if entity is None:
            return False

        self.session.delete(entity)
        self._commit()
        return True

    def _commit(self):
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKeyError(str(e.orig)) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Store write failed for {self.model.__name__}", exc_info=e)
            raise UnexpectedError() from e


class SqlBookRepository(SqlRepository, base.BookRepository):
    model = Book

    def save(self, entity: Book) -> Book:
        now = utcnow()
        if entity.id is None:
            entity.created_at = now
        entity.updated_at = now
        return super().save(entity)

    def delete_by_id(self, entity_id: int) -> bool:
        book = self.get(entity_id)
        if book is None:
            return False

        # ratings/reviews go with the book so aggregates never see orphans
        with self._store_errors("delete dependents"):
            self.session.execute(delete(Rating).where(Rating.book_id == entity_id))
            self.session.execute(delete(Review).where(Review.book_id == entity_id))
            self.session.delete(book)
        self._commit()
        return True

    def query(
        self,
        predicate: BookPredicate,
        page: int,
        size: int,
        sort: Sequence[SortOrder] = (),
    ) -> Tuple[List[Book], int]:
        order_by = []
        for order in sort:
            column = getattr(Book, order.field)
            order_by.append(column.desc() if order.descending else column.asc())

        # id last so equal sort keys still page deterministically
        if not any(order.field == "id" for order in sort):
            order_by.append(Book.id.asc())

        query = select(Book).where(predicate.to_clause()).order_by(*order_by)
        with self._store_errors("query"):
            return paginate(session=self.session, query=query, page=page, size=size)


class SqlRatingRepository(SqlRepository, base.RatingRepository):
    model = Rating

    def find_by_natural_key(self, user_id: int, book_id: int) -> Optional[Rating]:
        with self._store_errors("find_by_natural_key"):
            return self.session.exec(
                select(Rating).where(Rating.user_id == user_id, Rating.book_id == book_id)
            ).first()

    def top_rated_by_genre(self, genre: str, limit: int) -> List[TopRatedBook]:
        average = func.avg(Rating.rating).label("average_rating")
        count = func.count(Rating.id).label("rating_count")

        query = (
            select(Book.id, Book.title, Book.author, Book.genre, average, count)
            .select_from(Rating)
            .join(Book, Book.id == Rating.book_id)
            .where(Book.genre == genre)
            .group_by(Book.id, Book.title, Book.author, Book.genre)
            .order_by(average.desc(), count.desc(), Book.id.asc())
            .limit(limit)
        )

        with self._store_errors("top_rated_by_genre"):
            rows = self.session.exec(query).all()
        return [
            TopRatedBook(
                book_id=book_id,
                title=title,
                author=author,
                genre=book_genre,
                average_rating=float(avg_value),
                rating_count=int(count_value),
            )
            for book_id, title, author, book_genre, avg_value, count_value in rows
        ]


class SqlReviewRepository(SqlRepository, base.ReviewRepository):
    model = Review

    def find_by_natural_key(self, user_id: int, book_id: int) -> Optional[Review]:
        with self._store_errors("find_by_natural_key"):
            return self.session.exec(
                select(Review).where(Review.user_id == user_id, Review.book_id == book_id)
            ).first()


class SqlCatalogStore(base.CatalogStore):
    """All repositories sharing one session (one unit of work per request)."""

    def __init__(self, session: Session):
        self.session = session
        self.books = SqlBookRepository(session)
        self.ratings = SqlRatingRepository(session)
        self.reviews = SqlReviewRepository(session)

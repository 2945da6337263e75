# app/repositories/base.py
"""Entity store contract consumed by the catalog services.

Services only talk to these interfaces; ``app.repositories.sql`` is the
SQLModel-backed implementation used by the API.
"""
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from app.filters.book_filters import BookPredicate
from app.models.book import Book
from app.models.rating import Rating
from app.models.review import Review
from app.schemas.rating_schemas import TopRatedBook
from app.utils.sorting import SortOrder

ModelT = TypeVar("ModelT")


class DuplicateKeyError(Exception):
    """Raised by ``save`` when a uniqueness constraint rejects the write."""


class Repository(ABC, Generic[ModelT]):

    @abstractmethod
    def get(self, entity_id: int) -> Optional[ModelT]:
        ...

    @abstractmethod
    def save(self, entity: ModelT) -> ModelT:
        """Insert when ``entity.id`` is unset, update otherwise."""

    @abstractmethod
    def delete_by_id(self, entity_id: int) -> bool:
        """Return False when nothing was deleted."""

    @abstractmethod
    def exists_by_id(self, entity_id: int) -> bool:
        ...


class BookRepository(Repository[Book]):

    @abstractmethod
    def query(
        self,
        predicate: BookPredicate,
        page: int,
        size: int,
        sort: Sequence[SortOrder] = (),
    ) -> Tuple[List[Book], int]:
        ...


class NaturalKeyRepository(Repository[ModelT]):

    @abstractmethod
    def find_by_natural_key(self, user_id: int, book_id: int) -> Optional[ModelT]:
        ...


class RatingRepository(NaturalKeyRepository[Rating]):

    @abstractmethod
    def top_rated_by_genre(self, genre: str, limit: int) -> List[TopRatedBook]:
        ...


class ReviewRepository(NaturalKeyRepository[Review]):
    pass


class CatalogStore(ABC):
    books: BookRepository
    ratings: RatingRepository
    reviews: ReviewRepository

# app/filters/book_filters.py
"""Composable search predicates over books.

A ``BookPredicate`` is an ordered tuple of criteria joined with AND. It
starts out as ``MATCH_ALL`` and only grows through ``and_``, so an absent
search field simply never adds a criterion. Every criterion renders both
as a SQLAlchemy clause (for the store) and as an in-process check, which
keeps the predicate independent of the engine that executes it.

Case folding: ``matches`` lowers with Python (full Unicode) and the SQL
side uses ILIKE. PostgreSQL folds Unicode the same way; SQLite only folds
ASCII, so on SQLite "émile" does not find "Émile".
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Tuple

from sqlalchemy import and_, true

from app.models.book import Book


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class Criterion:
    field: str

    def column(self):
        return getattr(Book, self.field)

    def value_of(self, book) -> Any:
        return getattr(book, self.field)

    def to_clause(self):
        raise NotImplementedError

    def matches(self, book) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class ContainsIgnoreCase(Criterion):
    needle: str

    def to_clause(self):
        pattern = f"%{_escape_like(self.needle)}%"
        return self.column().ilike(pattern, escape="\\")

    def matches(self, book) -> bool:
        value = self.value_of(book)
        return value is not None and self.needle.lower() in value.lower()


@dataclass(frozen=True)
class Equals(Criterion):
    expected: Any

    def to_clause(self):
        return self.column() == self.expected

    def matches(self, book) -> bool:
        return self.value_of(book) == self.expected


@dataclass(frozen=True)
class AtLeast(Criterion):
    bound: Any

    def to_clause(self):
        return self.column() >= self.bound

    def matches(self, book) -> bool:
        value = self.value_of(book)
        return value is not None and value >= self.bound


@dataclass(frozen=True)
class AtMost(Criterion):
    bound: Any

    def to_clause(self):
        return self.column() <= self.bound

    def matches(self, book) -> bool:
        value = self.value_of(book)
        return value is not None and value <= self.bound


@dataclass(frozen=True)
class Between(Criterion):
    low: Any
    high: Any

    def to_clause(self):
        return self.column().between(self.low, self.high)

    def matches(self, book) -> bool:
        value = self.value_of(book)
        return value is not None and self.low <= value <= self.high


@dataclass(frozen=True)
class BookPredicate:
    criteria: Tuple[Criterion, ...] = ()

    def and_(self, criterion: Criterion) -> "BookPredicate":
        return BookPredicate(self.criteria + (criterion,))

    def matches(self, book) -> bool:
        return all(c.matches(book) for c in self.criteria)

    def to_clause(self):
        if not self.criteria:
            return true()
        return and_(*(c.to_clause() for c in self.criteria))


MATCH_ALL = BookPredicate()


@dataclass(frozen=True)
class BookSearchCriteria:
    title: Optional[str] = None
    author: Optional[str] = None
    genre: Optional[str] = None
    publish_date_from: Optional[date] = None
    publish_date_to: Optional[date] = None


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_book_predicate(criteria: BookSearchCriteria) -> BookPredicate:
    """Fold every present criterion into ``MATCH_ALL``.

    - title, author: case-insensitive substring match (trimmed)
    - genre: exact match (trimmed)
    - publish_date_from / publish_date_to: inclusive, each side optional
    """
    predicate = MATCH_ALL

    title = _present(criteria.title)
    if title:
        predicate = predicate.and_(ContainsIgnoreCase("title", title))

    author = _present(criteria.author)
    if author:
        predicate = predicate.and_(ContainsIgnoreCase("author", author))

    genre = _present(criteria.genre)
    if genre:
        predicate = predicate.and_(Equals("genre", genre))

    date_from, date_to = criteria.publish_date_from, criteria.publish_date_to
    if date_from is not None and date_to is not None:
        predicate = predicate.and_(Between("publish_date", date_from, date_to))
    elif date_from is not None:
        predicate = predicate.and_(AtLeast("publish_date", date_from))
    elif date_to is not None:
        predicate = predicate.and_(AtMost("publish_date", date_to))

    return predicate

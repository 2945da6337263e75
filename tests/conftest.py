import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.database import get_session
from app.main import app
from app.models import Book, Rating, Review  # noqa: F401  (register tables)
from app.repositories.sql import SqlCatalogStore
from app.schemas.book_schemas import BookCreate


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return SqlCatalogStore(session)


@pytest.fixture
def client(engine):
    """API client bound to the test database"""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_book():
    """Factory for BookCreate payloads with sensible defaults"""

    def _make(**overrides):
        fields = {
            "title": "Atomic Habits",
            "author": "James Clear",
            "description": "Tiny changes, remarkable results",
            "genre": "Self-Help",
            "publish_date": datetime.date(2018, 10, 16),
        }
        fields.update(overrides)
        return BookCreate(**fields)

    return _make

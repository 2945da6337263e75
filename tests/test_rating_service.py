import pytest
from sqlmodel import select
from sqlalchemy.exc import OperationalError

from app.exceptions import InvalidArgumentError, NotFoundError, UnexpectedError
from app.models.rating import Rating
from app.services import book_service, rating_service


@pytest.fixture
def book_id(store, make_book):
    return book_service.create_book(store, make_book()).id


def _rows(session):
    return session.exec(select(Rating)).all()


def test_first_rating_creates_row(store, session, book_id):
    rating = rating_service.upsert_rating(store, book_id, 5, 4)

    assert rating.id is not None
    assert rating.book_id == book_id
    assert rating.user_id == 5
    assert rating.rating == 4
    assert rating.created_at is not None
    assert len(_rows(session)) == 1


def test_second_rating_updates_in_place(store, session, book_id):
    first = rating_service.upsert_rating(store, book_id, 5, 4)
    second = rating_service.upsert_rating(store, book_id, 5, 2)

    rows = _rows(session)
    assert len(rows) == 1
    assert rows[0].rating == 2
    assert second.id == first.id
    assert second.created_at == first.created_at


def test_ratings_are_per_user(store, session, book_id):
    rating_service.upsert_rating(store, book_id, 1, 5)
    rating_service.upsert_rating(store, book_id, 2, 3)

    assert sorted(r.rating for r in _rows(session)) == [3, 5]


@pytest.mark.parametrize("value", [0, 6, -1, None])
def test_out_of_range_value_is_rejected(store, session, book_id, value):
    with pytest.raises(InvalidArgumentError):
        rating_service.upsert_rating(store, book_id, 5, value)

    assert _rows(session) == []


def test_rating_missing_book_raises_not_found(store):
    with pytest.raises(NotFoundError) as exc:
        rating_service.upsert_rating(store, 12345, 5, 3)

    assert "12345" in exc.value.message


def test_lost_insert_race_falls_back_to_update(store, session, book_id, monkeypatch):
    # another request inserted the row between our lookup and our insert
    store.ratings.save(Rating(user_id=7, book_id=book_id, rating=1))

    real_find = store.ratings.find_by_natural_key
    calls = []

    def stale_find(user_id, book_id):
        calls.append((user_id, book_id))
        if len(calls) == 1:
            return None
        return real_find(user_id, book_id)

    monkeypatch.setattr(store.ratings, "find_by_natural_key", stale_find)

    rating = rating_service.upsert_rating(store, book_id, 7, 5)

    rows = _rows(session)
    assert len(rows) == 1
    assert rows[0].rating == 5
    assert rating.rating == 5
    assert len(calls) == 2


def test_store_failure_surfaces_as_unexpected(store, session, book_id, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT INTO rating", {}, Exception("disk I/O error"))

    monkeypatch.setattr(session, "commit", broken_commit)

    with pytest.raises(UnexpectedError) as exc:
        rating_service.upsert_rating(store, book_id, 5, 3)

    assert "disk" not in exc.value.message
    assert isinstance(exc.value.__cause__, OperationalError)


@pytest.fixture
def genres(store, make_book):
    ids = {}
    for title, genre in [
        ("Dune", "Sci-Fi"),
        ("Foundation", "Sci-Fi"),
        ("Hyperion", "Sci-Fi"),
        ("Solaris", "Sci-Fi"),
        ("Emma", "Classic"),
    ]:
        ids[title] = book_service.create_book(store, make_book(title=title, genre=genre)).id
    return ids


def _rate(store, book_id, *values):
    for user_id, value in enumerate(values, start=1):
        rating_service.upsert_rating(store, book_id, user_id, value)


def test_top_rated_orders_by_average_then_count(store, genres):
    _rate(store, genres["Dune"], 5, 4)          # 4.5 over 2
    _rate(store, genres["Foundation"], 5, 5, 3, 5)  # 4.5 over 4
    _rate(store, genres["Hyperion"], 5)         # 5.0 over 1
    _rate(store, genres["Emma"], 5, 5)          # other genre

    top = rating_service.top_rated_by_genre(store, "Sci-Fi", 10)

    assert [row.title for row in top] == ["Hyperion", "Foundation", "Dune"]
    assert [row.rating_count for row in top] == [1, 4, 2]
    assert top[0].average_rating == pytest.approx(5.0)
    assert top[1].average_rating == pytest.approx(4.5)
    assert all(row.genre == "Sci-Fi" for row in top)


def test_top_rated_excludes_unrated_books(store, genres):
    _rate(store, genres["Dune"], 1)

    top = rating_service.top_rated_by_genre(store, "Sci-Fi", 10)

    assert [row.book_id for row in top] == [genres["Dune"]]
    assert "Solaris" not in [row.title for row in top]


def test_top_rated_full_ties_are_deterministic(store, genres):
    _rate(store, genres["Solaris"], 4)
    _rate(store, genres["Dune"], 4)

    top = rating_service.top_rated_by_genre(store, "Sci-Fi", 10)

    assert [row.book_id for row in top] == sorted([genres["Dune"], genres["Solaris"]])


def test_top_rated_respects_limit(store, genres):
    for title in ["Dune", "Foundation", "Hyperion"]:
        _rate(store, genres[title], 3)

    assert len(rating_service.top_rated_by_genre(store, "Sci-Fi", 2)) == 2


@pytest.mark.parametrize("raw,expected", [(0, 1), (-3, 1), (1, 1), (50, 50), (100, 100), (10_000, 100)])
def test_limit_is_clamped(raw, expected):
    assert rating_service.clamp_limit(raw) == expected


def test_top_rated_with_zero_limit_still_returns_one(store, genres):
    _rate(store, genres["Dune"], 3)
    _rate(store, genres["Hyperion"], 5)

    top = rating_service.top_rated_by_genre(store, "Sci-Fi", 0)

    assert [row.title for row in top] == ["Hyperion"]


def test_top_rated_unknown_genre_is_empty(store, genres):
    _rate(store, genres["Dune"], 3)
    assert rating_service.top_rated_by_genre(store, "Poetry", 5) == []


def test_failed_aggregate_read_surfaces_as_unexpected(store, session, monkeypatch):
    def broken_exec(*args, **kwargs):
        raise OperationalError("SELECT avg(rating) FROM rating", {}, Exception("connection refused to db-host-7"))

    monkeypatch.setattr(session, "exec", broken_exec)

    with pytest.raises(UnexpectedError) as exc:
        rating_service.top_rated_by_genre(store, "Sci-Fi", 5)

    assert "db-host-7" not in exc.value.message
    assert "SELECT" not in exc.value.message
    assert isinstance(exc.value.__cause__, OperationalError)


def test_failed_natural_key_lookup_surfaces_as_unexpected(store, session, book_id, monkeypatch):
    real_exec = session.exec

    def broken_for_ratings(statement, *args, **kwargs):
        if "rating" in str(statement):
            raise OperationalError(str(statement), {}, Exception("connection reset"))
        return real_exec(statement, *args, **kwargs)

    monkeypatch.setattr(session, "exec", broken_for_ratings)

    with pytest.raises(UnexpectedError):
        rating_service.upsert_rating(store, book_id, 5, 3)

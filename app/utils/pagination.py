from sqlalchemy import func
from sqlmodel import select

from app.config import settings
from app.exceptions import InvalidArgumentError


def check_page(page: int, size: int):
    """Validate a zero-based page request and cap its size."""
    if page < 0:
        raise InvalidArgumentError(f"page must be >= 0, got {page}")

    if size < 1:
        raise InvalidArgumentError(f"size must be >= 1, got {size}")

    return page, min(size, settings.MAX_PAGE_SIZE)


def total_pages(total: int, size: int) -> int:
    return (total + size - 1) // size


def paginate(
    *,
    session,
    query,
    page: int = 0,
    size: int = 10,
):
    offset = page * size

    total = session.exec(
        select(func.count()).select_from(query.subquery())
    ).one()

    results = session.exec(
        query.offset(offset).limit(size)
    ).all()

    return list(results), total

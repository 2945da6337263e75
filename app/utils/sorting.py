from typing import Iterable, List, NamedTuple, Optional

from app.exceptions import InvalidArgumentError


# camelCase names accepted for callers still using the old query params
SORTABLE_FIELDS = {
    "id": "id",
    "title": "title",
    "author": "author",
    "genre": "genre",
    "publish_date": "publish_date",
    "publishDate": "publish_date",
    "created_at": "created_at",
    "createdAt": "created_at",
    "updated_at": "updated_at",
    "updatedAt": "updated_at",
}


class SortOrder(NamedTuple):
    field: str
    descending: bool = False


def parse_sort(sort: Optional[Iterable[str]]) -> List[SortOrder]:
    """Parse ``["title", "publishDate,desc"]`` style sort params."""
    orders = []

    for raw in sort or ():
        if not raw or not raw.strip():
            continue

        name, _, direction = raw.partition(",")
        name, direction = name.strip(), direction.strip().lower() or "asc"

        field = SORTABLE_FIELDS.get(name)
        if field is None:
            raise InvalidArgumentError(f"Cannot sort by unknown field '{name}'")

        if direction not in ("asc", "desc"):
            raise InvalidArgumentError(f"Invalid sort direction '{direction}' for field '{name}'")

        orders.append(SortOrder(field, direction == "desc"))

    return orders

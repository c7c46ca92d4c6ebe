"""
Book Query Builder

Turns the list endpoint's raw query-string values into a validated,
immutable BookQuery, and applies a BookQuery to a SQLAlchemy select.

Query parameters (all optional, all strings on the wire):
- filter: genre code, matched case-insensitively (upper-cased)
- sortBy: field to sort on, default "createdAt"
- sort:   "asc" for ascending; anything else sorts descending
- limit:  page size, default "10", at most 100 unless configured
- page:   1-indexed page number, default "1"

Examples:
    GET /api/books?filter=fiction&sortBy=title&sort=asc&limit=5&page=2
"""

import enum
import re
from dataclasses import dataclass

from sqlalchemy import Select

from library_api.errors import InvalidFilterError, InvalidPaginationError, InvalidSortError
from library_api.models import Book, Genre

DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT = "desc"
DEFAULT_LIMIT = "10"
DEFAULT_PAGE = "1"
MAX_LIMIT = 100

# Largest OFFSET the database drivers accept (signed 64-bit)
MAX_SKIP = 2**63 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Public (camelCase) field name → model column
SORTABLE_FIELDS = {
    "createdAt": Book.created_at,
    "updatedAt": Book.updated_at,
    "title": Book.title,
    "author": Book.author,
    "genre": Book.genre,
    "copies": Book.copies,
}


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class BookQuery:
    """
    Validated list parameters for a single request.

    Attributes:
        genre: Genre to filter on, or None for all books
        sort_by: Public name of the sort field (a key of SORTABLE_FIELDS)
        direction: Sort direction
        page: 1-indexed page number
        limit: Page size
    """

    genre: Genre | None = None
    sort_by: str = DEFAULT_SORT_BY
    direction: SortDirection = SortDirection.DESC
    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        """Number of records before the requested page."""
        return (self.page - 1) * self.limit


def _parse_positive_int(value: str | None) -> int | None:
    if value is None or not _INTEGER_RE.fullmatch(value.strip()):
        return None
    number = int(value.strip())
    return number if number >= 1 else None


def build_book_query(
    filter: str | None = None,
    sort_by: str | None = DEFAULT_SORT_BY,
    sort: str | None = DEFAULT_SORT,
    limit: str | None = DEFAULT_LIMIT,
    page: str | None = DEFAULT_PAGE,
    max_limit: int = MAX_LIMIT,
) -> BookQuery:
    """
    Validate raw list parameters and build a BookQuery.

    Checks run in order: genre filter, pagination, sort field. The first
    failure is raised.

    Raises:
        InvalidFilterError: filter is not a Genre code
        InvalidPaginationError: limit or page is not a positive integer
            or is out of range
        InvalidSortError: sort_by is not a sortable field
    """
    genre = None
    if filter:
        genre_code = filter.upper()
        if genre_code not in Genre.values():
            raise InvalidFilterError(Genre.values())
        genre = Genre(genre_code)

    limit_number = _parse_positive_int(limit if limit is not None else DEFAULT_LIMIT)
    page_number = _parse_positive_int(page if page is not None else DEFAULT_PAGE)
    if limit_number is None or page_number is None:
        raise InvalidPaginationError(limit, page)
    if limit_number > max_limit or (page_number - 1) * limit_number > MAX_SKIP:
        raise InvalidPaginationError(limit, page)

    sort_by = sort_by or DEFAULT_SORT_BY
    if sort_by not in SORTABLE_FIELDS:
        raise InvalidSortError(sort_by, list(SORTABLE_FIELDS))

    direction = SortDirection.ASC if sort == "asc" else SortDirection.DESC

    return BookQuery(
        genre=genre,
        sort_by=sort_by,
        direction=direction,
        page=page_number,
        limit=limit_number,
    )


def apply_book_filter(stmt: Select, query: BookQuery) -> Select:
    """Apply the genre filter (if any) to a select statement."""
    if query.genre is not None:
        stmt = stmt.where(Book.genre == query.genre)
    return stmt


def apply_book_page(stmt: Select, query: BookQuery) -> Select:
    """
    Apply ordering and pagination to a select statement.

    Ties on the sort field are broken by id in the same direction so that
    consecutive pages never overlap.
    """
    column = SORTABLE_FIELDS[query.sort_by]
    if query.direction is SortDirection.ASC:
        stmt = stmt.order_by(column.asc(), Book.id.asc())
    else:
        stmt = stmt.order_by(column.desc(), Book.id.desc())
    return stmt.offset(query.skip).limit(query.limit)

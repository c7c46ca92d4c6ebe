"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Dependencies here:
- DbSession: per-request database session
- BookQueryParams: validated list parameters (filter, sort, pagination)
- ValidBookId: structurally valid book identifier from the URL path

Validation dependencies raise ApiError subclasses; the app's exception
handlers turn those into the error envelope before the route body runs.
"""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.database import get_db
from library_api.errors import InvalidBookIdError
from library_api.services.book_query import (
    DEFAULT_PAGE,
    DEFAULT_SORT,
    DEFAULT_SORT_BY,
    BookQuery,
    build_book_query,
)
from library_api.utils.ids import is_valid_object_id

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
#
# You can write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# List Parameters
# =============================================================================
def get_book_query(
    filter_: str | None = Query(
        default=None,
        alias="filter",
        description="Genre code to filter by (case-insensitive)",
        examples=["FICTION", "science"],
    ),
    sort_by: str = Query(
        default=DEFAULT_SORT_BY,
        alias="sortBy",
        description="Field to sort on",
        examples=["createdAt", "title"],
    ),
    sort: str = Query(
        default=DEFAULT_SORT,
        description="'asc' for ascending; anything else sorts descending",
        examples=["asc", "desc"],
    ),
    limit: str = Query(
        default=str(settings.default_page_size),
        description=f"Page size (positive integer, at most {settings.max_page_size})",
        examples=["10", "25"],
    ),
    page: str = Query(
        default=DEFAULT_PAGE,
        description="Page number, 1-indexed (positive integer)",
        examples=["1", "2"],
    ),
) -> BookQuery:
    """
    Build the validated BookQuery for the list endpoint.

    Parameters are declared as strings so that malformed values reach
    build_book_query and produce its error envelope, rather than
    FastAPI's generic type error.
    """
    return build_book_query(
        filter=filter_,
        sort_by=sort_by,
        sort=sort,
        limit=limit,
        page=page,
        max_limit=settings.max_page_size,
    )


BookQueryParams = Annotated[BookQuery, Depends(get_book_query)]


# =============================================================================
# Path Parameters
# =============================================================================
def get_valid_book_id(book_id: str) -> str:
    """
    Check that the book_id path parameter is a well-formed identifier.

    Returns:
        The identifier, lower-cased

    Raises:
        InvalidBookIdError: 400 if the identifier is malformed
    """
    if not is_valid_object_id(book_id):
        raise InvalidBookIdError()
    return book_id.lower()


ValidBookId = Annotated[str, Depends(get_valid_book_id)]

"""
Books Router

CRUD endpoints for books, mounted at /api/books:

    GET    /api/books            list (filter, sort, paginate)
    POST   /api/books            create
    GET    /api/books/{bookId}   read
    PUT    /api/books/{bookId}   partial update
    DELETE /api/books/{bookId}   delete

Every response uses the {success, message, data, error, meta} envelope.
Error branches raise ApiError subclasses, so a handler stops at the first
failure and the request gets exactly one response.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, status
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from library_api.dependencies import BookQueryParams, DbSession, ValidBookId
from library_api.errors import (
    BookConflictError,
    BookNotFoundError,
    BookValidationError,
    StorageError,
)
from library_api.models import Book
from library_api.models.book import utcnow
from library_api.schemas import (
    ApiResponse,
    BookCreate,
    BookResponse,
    BookUpdate,
    PageMeta,
)
from library_api.services.book_query import apply_book_filter, apply_book_page

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"description": "Invalid input"},
        404: {"description": "Book not found"},
    },
)


# =============================================================================
# Helper Functions
# =============================================================================
def _failure_detail(exc: SQLAlchemyError) -> str:
    """Raw driver message when there is one, else the SQLAlchemy message."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def storage_errors(db: Session, failure_message: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures inside the block into API errors.

    The session is rolled back before the error propagates.

    Raises:
        BookConflictError: 409 on a uniqueness violation
        StorageError: 500 with the raw failure message otherwise
    """
    try:
        yield
    except IntegrityError as exc:
        db.rollback()
        raise BookConflictError(_failure_detail(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"{failure_message}: {exc}")
        raise StorageError(failure_message, _failure_detail(exc)) from exc


def get_book_or_404(db: Session, book_id: str) -> Book:
    """
    Get a book by ID or raise 404.

    Raises:
        BookNotFoundError: if no book has this ID
    """
    book = db.get(Book, book_id)
    if book is None:
        raise BookNotFoundError()
    return book


def book_document(book: Book) -> dict:
    """Current writable fields of a stored book, keyed like BookCreate."""
    return {field: getattr(book, field) for field in BookCreate.model_fields}


# =============================================================================
# CRUD Endpoints
# =============================================================================
@router.get(
    "",
    response_model=ApiResponse[list[BookResponse]],
    response_model_exclude_unset=True,
    summary="List books",
    description="Get a page of books, optionally filtered by genre and sorted by a field.",
)
def list_books(db: DbSession, query: BookQueryParams) -> ApiResponse[list[BookResponse]]:
    """
    List books with optional genre filter, sorting and pagination.

    meta.total is the number of books matching the filter, not the size
    of the returned page. The count and the page are two separate
    statements and may disagree under concurrent writes.
    """
    with storage_errors(db, "Failed to retrieve books"):
        base_stmt = apply_book_filter(select(Book), query)

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = db.execute(count_stmt).scalar() or 0

        books = db.execute(apply_book_page(base_stmt, query)).scalars().all()

    return ApiResponse[list[BookResponse]](
        success=True,
        message="Books retrieved successfully",
        data=[BookResponse.model_validate(book) for book in books],
        meta=PageMeta(total=total, page=query.page, limit=query.limit),
    )


@router.post(
    "",
    response_model=ApiResponse[BookResponse],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a book",
    description="Create a new book. The id and timestamps are assigned by the server.",
)
def create_book(book_data: BookCreate, db: DbSession) -> ApiResponse[BookResponse]:
    """
    Create a new book.

    The request body has already been validated against BookCreate;
    violations never reach this function and are reported as 400.

    Raises:
        BookConflictError: 409 if the ISBN is already taken
        StorageError: 500 on any other database failure
    """
    with storage_errors(db, "Failed to create book"):
        book = Book(**book_data.model_dump())
        db.add(book)
        db.commit()
        db.refresh(book)

    logger.info(f"Created book {book.id} ('{book.title}')")

    return ApiResponse[BookResponse](
        success=True,
        message="Book created successfully",
        data=BookResponse.model_validate(book),
    )


@router.get(
    "/{book_id}",
    response_model=ApiResponse[BookResponse],
    response_model_exclude_unset=True,
    summary="Get a book by ID",
)
def get_book(book_id: ValidBookId, db: DbSession) -> ApiResponse[BookResponse]:
    with storage_errors(db, "Failed to retrieve book"):
        book = get_book_or_404(db, book_id)

    return ApiResponse[BookResponse](
        success=True,
        message="Book retrieved successfully",
        data=BookResponse.model_validate(book),
    )


@router.put(
    "/{book_id}",
    response_model=ApiResponse[BookResponse],
    response_model_exclude_unset=True,
    summary="Update a book",
    description="Update some or all fields of a book. Omitted fields are left unchanged.",
)
def update_book(
    book_id: ValidBookId,
    book_data: BookUpdate,
    db: DbSession,
) -> ApiResponse[BookResponse]:
    """
    Apply a partial update to a book.

    Only fields present in the body are changed. The stored document
    merged with the changes is validated against BookCreate before
    anything is written, so the result always satisfies the create rules.

    Raises:
        BookNotFoundError: 404 if the book does not exist
        BookValidationError: 400 if the merged document is invalid
        BookConflictError: 409 if the new ISBN is already taken
        StorageError: 500 on any other database failure
    """
    with storage_errors(db, "Failed to update book"):
        book = get_book_or_404(db, book_id)

        changes = book_data.model_dump(exclude_unset=True)
        merged = {**book_document(book), **changes}
        try:
            validated = BookCreate.model_validate(merged)
        except ValidationError as exc:
            raise BookValidationError(exc.errors()) from exc

        for field in changes:
            setattr(book, field, getattr(validated, field))
        # onupdate only fires when a column changed; every update counts
        book.updated_at = utcnow()

        db.commit()
        db.refresh(book)

    logger.info(f"Updated book {book.id}: {sorted(changes)}")

    return ApiResponse[BookResponse](
        success=True,
        message="Book updated successfully",
        data=BookResponse.model_validate(book),
    )


@router.delete(
    "/{book_id}",
    response_model=ApiResponse[None],
    response_model_exclude_unset=True,
    summary="Delete a book",
    description="Permanently delete a book.",
)
def delete_book(book_id: ValidBookId, db: DbSession) -> ApiResponse[None]:
    with storage_errors(db, "Failed to delete book"):
        book = get_book_or_404(db, book_id)
        db.delete(book)
        db.commit()

    logger.info(f"Deleted book {book_id}")

    return ApiResponse[None](
        success=True,
        message="Book deleted successfully",
        data=None,
    )

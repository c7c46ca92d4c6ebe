"""
API Errors

Typed exceptions for every failure a book endpoint can report, plus the
exception handlers that turn them into the error envelope:

    {"success": false, "message": "...", "error": {...}}

Handlers raise instead of writing a response, so each request produces
exactly one response no matter which branch fails.

Status mapping:
- Invalid input (filter, pagination, sort field, id, body)  → 400
- Missing record                                             → 404
- Unique constraint violated                                 → 409
- Any other storage failure                                  → 500
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from library_api.config import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Types
# =============================================================================
class ApiError(Exception):
    """
    Base class for errors reported to the client.

    Attributes:
        status_code: HTTP status of the error response
        message: Human-readable summary, sent as "message"
        error: Optional structured payload, sent as "error"
    """

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        error: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error = error
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> dict[str, Any]:
        """Build the error envelope for this exception."""
        body: dict[str, Any] = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class InvalidFilterError(ApiError):
    """Genre filter is not a member of the Genre enumeration."""

    def __init__(self, valid_genres: list[str]) -> None:
        super().__init__(
            "Invalid genre filter",
            error={"validGenres": valid_genres},
        )


class InvalidPaginationError(ApiError):
    """limit or page is not a positive integer."""

    def __init__(self, limit: str | None, page: str | None) -> None:
        super().__init__(
            "Limit and page must be positive numbers",
            error={
                "received": {"limit": limit, "page": page},
                "expected": "Positive integers",
            },
        )


class InvalidSortError(ApiError):
    """sortBy names a field that cannot be sorted on."""

    def __init__(self, sort_by: str, valid_fields: list[str]) -> None:
        super().__init__(
            "Invalid sort field",
            error={"received": sort_by, "validSortFields": valid_fields},
        )


class InvalidBookIdError(ApiError):
    def __init__(self) -> None:
        super().__init__("Invalid book ID")


class BookNotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self) -> None:
        super().__init__("Book not found")


class BookValidationError(ApiError):
    """A book document failed the schema rules."""

    def __init__(self, errors: Sequence[Any]) -> None:
        super().__init__("Validation failed", error=format_validation_errors(errors))


class BookConflictError(ApiError):
    """A write violated a uniqueness constraint (e.g. duplicate ISBN)."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, detail: str) -> None:
        super().__init__("Book conflicts with an existing record", error=detail)


class StorageError(ApiError):
    """Unclassified persistence failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: str) -> None:
        super().__init__(message, error=detail)


# =============================================================================
# Validation Error Translation
# =============================================================================
def format_validation_errors(errors: Sequence[Any]) -> dict[str, Any]:
    """
    Translate Pydantic error dicts into field-level detail.

    Works for both RequestValidationError (locations start with "body")
    and pydantic.ValidationError raised by model_validate(). The first
    error reported for a field wins.

    Example output:
        {
            "name": "ValidationError",
            "errors": {
                "genre": {
                    "message": "Input should be 'FICTION', ...",
                    "kind": "enum",
                    "value": "POETRY",
                }
            }
        }
    """
    details: dict[str, Any] = {}
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        path = ".".join(str(part) for part in loc) or "body"

        kind = err.get("type")
        details.setdefault(
            path,
            {
                "message": err.get("msg"),
                "kind": kind,
                "value": None if kind == "missing" else err.get("input"),
            },
        )
    return {"name": "ValidationError", "errors": details}


# =============================================================================
# Exception Handlers
# =============================================================================
def register_error_handlers(app: FastAPI) -> None:
    """Register the envelope-producing exception handlers on the app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.error})")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=jsonable_encoder(exc.to_response()),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        body = {
            "success": False,
            "message": "Validation failed",
            "error": format_validation_errors(exc.errors()),
        }
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(body),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        body: dict[str, Any] = {"success": False, "message": "An internal error occurred."}
        if get_settings().debug:
            body["error"] = str(exc)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body,
        )

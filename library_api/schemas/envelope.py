"""
Response Envelope Schemas

Every book endpoint answers with the same wrapper:

    {
        "success": true,
        "message": "Books retrieved successfully",
        "data": [...],
        "meta": {"total": 42, "page": 1, "limit": 10}
    }

Error responses use the same keys with success=false and an "error"
payload; they are built by the exception handlers in library_api.errors.

Routes return these with response_model_exclude_unset=True, so "meta"
only appears where it was set, while an explicit data=None survives.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class PageMeta(BaseModel):
    """Pagination metadata for list responses."""

    total: int = Field(..., ge=0, description="Number of records matching the query")
    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, description="Page size")


class ApiResponse(BaseModel, Generic[DataT]):
    """Uniform success envelope."""

    success: bool = Field(default=True)
    message: str
    data: DataT | None = None
    meta: PageMeta | None = None

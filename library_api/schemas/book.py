"""
Book Pydantic Schemas

These schemas are the construction contract for a Book: every write
(create, and the merged document of an update) is validated against
BookCreate before it reaches the database.

Handles:
- Required fields (title, genre)
- Genre membership
- ISBN validation
- camelCase field names on the wire (createdAt, updatedAt)
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from library_api.models.genre import Genre


def clean_isbn(v: str | None) -> str | None:
    """
    Validate ISBN format.

    Accepts:
    - ISBN-10: 9 digits followed by a digit or X
    - ISBN-13: 13 digits

    ISBNs can include hyphens and spaces, which are stripped for storage.
    """
    if v is None:
        return v

    cleaned = re.sub(r"[-\s]", "", v)

    if len(cleaned) == 10:
        if not re.match(r"^\d{9}[\dX]$", cleaned):
            raise ValueError(
                "Invalid ISBN-10 format. Must be 10 characters: "
                "9 digits followed by a digit or 'X'"
            )
    elif len(cleaned) == 13:
        if not cleaned.isdigit():
            raise ValueError("Invalid ISBN-13 format. Must be exactly 13 digits")
    else:
        raise ValueError("ISBN must be either 10 or 13 characters (excluding hyphens)")

    return cleaned


class BookBase(BaseModel):
    """Shared book fields and their validation rules."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    author: str | None = Field(
        default=None,
        max_length=255,
        description="Author name",
        examples=["George Orwell"],
    )

    genre: Genre = Field(
        ...,
        description="Genre code",
        examples=["FICTION"],
    )

    isbn: str | None = Field(
        default=None,
        max_length=20,
        description="ISBN-10 or ISBN-13",
        examples=["978-0451524935", "0-06-112008-1"],
    )

    description: str | None = Field(
        default=None,
        max_length=5000,
        description="Book description or summary",
    )

    copies: int = Field(
        default=1,
        ge=0,
        description="Number of copies owned by the library",
        examples=[3],
    )

    available: bool = Field(
        default=True,
        description="Whether the book can currently be borrowed",
    )

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str | None) -> str | None:
        return clean_isbn(v)

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Validate and normalize title."""
        if not v.strip():
            raise ValueError("Title cannot be empty or whitespace")
        return v.strip()

    @field_validator("author")
    @classmethod
    def strip_author(cls, v: str | None) -> str | None:
        return v.strip() if v else v


class BookCreate(BookBase):
    """
    Schema for creating a new book.

    Example request body:
    {
        "title": "1984",
        "author": "George Orwell",
        "genre": "FICTION",
        "isbn": "978-0451524935",
        "copies": 3
    }
    """


class BookUpdate(BaseModel):
    """
    Schema for updating an existing book.

    All fields are optional; only the fields present in the request body
    are applied. The merged result is re-validated against BookCreate, so
    an explicit null for a required field is rejected there.
    """

    title: str | None = Field(default=None, max_length=500)
    author: str | None = Field(default=None, max_length=255)
    genre: Genre | None = Field(default=None)
    isbn: str | None = Field(default=None, max_length=20)
    description: str | None = Field(default=None, max_length=5000)
    copies: int | None = Field(default=None, ge=0)
    available: bool | None = Field(default=None)


class BookResponse(BookBase):
    """
    Schema for book responses.

    Adds the system-assigned fields (id, timestamps). Timestamps are
    exposed in camelCase.
    """

    id: str = Field(..., description="Unique identifier")
    created_at: datetime = Field(..., description="When the book was created")
    updated_at: datetime = Field(..., description="When the book was last updated")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "6650c3e2a1b2c3d4e5f60718",
                "title": "1984",
                "author": "George Orwell",
                "genre": "FICTION",
                "isbn": "9780451524935",
                "description": "A dystopian novel about totalitarianism",
                "copies": 3,
                "available": True,
                "createdAt": "2024-01-15T10:30:00Z",
                "updatedAt": "2024-01-15T10:30:00Z",
            }
        },
    )

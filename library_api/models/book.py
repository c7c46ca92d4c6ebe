"""
Book Model

The central model of the Library Management API, representing the books
held by the library.

Timestamps are set on the Python side (not with server_default) so that
they carry microsecond precision on every backend; the list endpoint
sorts by createdAt and needs a stable order between rapid inserts.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base
from library_api.models.genre import Genre
from library_api.utils.ids import OBJECT_ID_LENGTH, new_object_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Book(Base):
    """
    Book model representing books in the library.

    Table: books

    Fields:
    - id: 24-character hex identifier (system-generated)
    - title: Book title (required)
    - author: Author name
    - genre: One of the Genre codes (required)
    - isbn: International Standard Book Number (unique when present)
    - description: Book summary/description
    - copies: Number of copies the library owns
    - available: Whether the book can currently be borrowed

    Example:
        book = Book(
            title="1984",
            author="George Orwell",
            genre=Genre.FICTION,
            isbn="9780451524935",
            copies=3,
        )
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
    )

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    author: Mapped[str | None] = mapped_column(
        String(255),
        index=True,
        nullable=True,
        comment="Author name"
    )

    # Stored as a VARCHAR with a CHECK constraint rather than a native enum
    # type, so the same table works on PostgreSQL and SQLite.
    genre: Mapped[Genre] = mapped_column(
        Enum(
            Genre,
            name="genre",
            native_enum=False,
            length=20,
            validate_strings=True,
            create_constraint=True,
        ),
        index=True,
        nullable=False,
        comment="Genre code"
    )

    isbn: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=True,
        comment="International Standard Book Number"
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Book description or summary"
    )

    copies: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="Number of copies owned"
    )

    available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the book can be borrowed"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        index=True,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Book(id='{self.id}', title='{self.title}', genre='{self.genre}')"

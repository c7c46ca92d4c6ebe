"""
Genre Enumeration

Books belong to exactly one genre drawn from a fixed, closed set of codes.
The enumeration is shared by the SQLAlchemy model, the Pydantic schemas
and the list endpoint's genre filter.
"""

import enum


class Genre(str, enum.Enum):
    """Permitted book-category codes."""

    FICTION = "FICTION"
    NON_FICTION = "NON_FICTION"
    SCIENCE = "SCIENCE"
    HISTORY = "HISTORY"
    BIOGRAPHY = "BIOGRAPHY"
    FANTASY = "FANTASY"

    @classmethod
    def values(cls) -> list[str]:
        """All genre codes, in declaration order."""
        return [genre.value for genre in cls]

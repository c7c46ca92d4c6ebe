#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample books for development.

USAGE:
    # From the project root, with the package installed
    python scripts/seed_data.py

    # Keep books that are already stored
    python scripts/seed_data.py --keep

Every book goes through BookCreate first, so seeded rows obey the same
rules as books created through the API.
"""

import argparse

from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import Book
from library_api.schemas import BookCreate

SAMPLE_BOOKS = [
    {
        "title": "1984",
        "author": "George Orwell",
        "genre": "FICTION",
        "isbn": "978-0451524935",
        "description": "A dystopian novel set in a totalitarian society.",
        "copies": 4,
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "genre": "FICTION",
        "isbn": "978-0141439518",
        "copies": 2,
    },
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "genre": "FANTASY",
        "isbn": "978-0547928227",
        "copies": 5,
    },
    {
        "title": "A Brief History of Time",
        "author": "Stephen Hawking",
        "genre": "SCIENCE",
        "isbn": "978-0553380163",
        "copies": 3,
    },
    {
        "title": "The Selfish Gene",
        "author": "Richard Dawkins",
        "genre": "SCIENCE",
        "isbn": "978-0198788607",
        "copies": 1,
    },
    {
        "title": "Sapiens: A Brief History of Humankind",
        "author": "Yuval Noah Harari",
        "genre": "HISTORY",
        "isbn": "978-0062316097",
        "copies": 3,
    },
    {
        "title": "The Guns of August",
        "author": "Barbara W. Tuchman",
        "genre": "HISTORY",
        "copies": 1,
    },
    {
        "title": "Steve Jobs",
        "author": "Walter Isaacson",
        "genre": "BIOGRAPHY",
        "isbn": "978-1451648539",
        "copies": 2,
    },
    {
        "title": "Thinking, Fast and Slow",
        "author": "Daniel Kahneman",
        "genre": "NON_FICTION",
        "isbn": "978-0374533557",
        "copies": 0,
        "available": False,
    },
]


def clear_data(db: Session) -> None:
    """Delete every stored book."""
    print("Clearing existing books...")
    db.query(Book).delete()
    db.commit()
    print("Books cleared.")


def create_books(db: Session) -> list[Book]:
    """Create the sample books."""
    print("Creating books...")
    books = [Book(**BookCreate(**data).model_dump()) for data in SAMPLE_BOOKS]
    db.add_all(books)
    db.commit()
    for book in books:
        db.refresh(book)

    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Seed the database with sample books.

    Args:
        clear_existing: If True, deletes stored books before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nSummary:")
        print(f"  - Books: {len(books)}")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the library database with sample books.")
    parser.add_argument("--keep", action="store_true", help="Keep books that are already stored")
    args = parser.parse_args()

    seed_database(clear_existing=not args.keep)

"""
pytest Fixtures for Library Management API Tests

Shared fixtures used across all test files.

FIXTURE SCOPES:
- engine, db_session, client: function scope, so every test starts with
  an empty books table
- sample data fixtures: created fresh for each test that requests them
"""

from collections.abc import Generator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import Book, Genre

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory keeps the tests fast and free of external services.
# StaticPool keeps the single connection alive; without it the in-memory
# database would disappear between connections.


@pytest.fixture
def engine():
    """Create a SQLite in-memory engine with a fresh schema."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session bound to the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    The get_db dependency is overridden so every request uses db_session.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a single stored book."""
    book = Book(
        title="1984",
        author="George Orwell",
        genre=Genre.FICTION,
        isbn="9780451524935",
        description="A dystopian novel set in a totalitarian society.",
        copies=3,
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """
    Create 15 books for pagination, sorting and filtering tests.

    Book i (1-based) is created i minutes after a fixed start time, and
    genres cycle through the Genre enumeration in declaration order.
    """
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    genres = list(Genre)
    books = []
    for i in range(15):
        book = Book(
            title=f"Test Book {i + 1:02d}",
            author=f"Author {i % 4}",
            genre=genres[i % len(genres)],
            copies=i,
            created_at=start + timedelta(minutes=i),
            updated_at=start + timedelta(minutes=i),
        )
        books.append(book)
        db_session.add(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books

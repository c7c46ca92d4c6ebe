"""
Test Suite for the Library Management API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_books.py: Tests for /api/books endpoints
- test_book_query.py: Tests for list-parameter validation
- test_errors.py: Tests for the error envelope helpers
- test_ids.py: Tests for identifier helpers
- test_app.py: Tests for root and health endpoints

Running Tests:
    pytest
    pytest --cov=library_api --cov-report=html
    pytest tests/test_books.py -v
"""

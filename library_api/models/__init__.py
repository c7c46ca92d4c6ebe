"""
SQLAlchemy Models Package

This package contains all database models for the Library Management API.

Import all models here to:
1. Make them available as: from library_api.models import Book, Genre
2. Ensure Alembic discovers them for migrations
"""

from library_api.models.genre import Genre
from library_api.models.book import Book

__all__ = [
    "Book",
    "Genre",
]

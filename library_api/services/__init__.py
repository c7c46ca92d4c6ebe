"""
Services Package

Business logic kept separate from HTTP handling (routers):
- book_query.py: list-parameter validation and query construction
"""

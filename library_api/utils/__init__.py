"""
Utilities Package

Helper functions used across the application:
- ids.py: generation and structural validation of record identifiers
"""

from library_api.utils.ids import OBJECT_ID_LENGTH, is_valid_object_id, new_object_id

__all__ = [
    "OBJECT_ID_LENGTH",
    "is_valid_object_id",
    "new_object_id",
]

"""
Book identifier helpers.

Identifiers are 24 lowercase hex characters: a 4-byte big-endian creation
timestamp followed by 8 random bytes. They sort roughly by creation time
and are safe to expose in URLs.
"""

import re
import secrets
import time

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def new_object_id() -> str:
    """Generate a new identifier for a stored record."""
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{secrets.token_hex(8)}"


def is_valid_object_id(value: str | None) -> bool:
    """Return True if value is structurally a valid identifier."""
    if not value:
        return False
    return _OBJECT_ID_RE.fullmatch(value) is not None

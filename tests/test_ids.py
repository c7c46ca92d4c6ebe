"""
Tests for identifier helpers.
"""

import time

import pytest

from library_api.utils.ids import OBJECT_ID_LENGTH, is_valid_object_id, new_object_id


def test_new_object_id_shape():
    object_id = new_object_id()

    assert len(object_id) == OBJECT_ID_LENGTH
    assert is_valid_object_id(object_id)
    assert object_id == object_id.lower()


def test_new_object_id_is_unique():
    assert len({new_object_id() for _ in range(1000)}) == 1000


def test_new_object_id_starts_with_timestamp():
    before = int(time.time())
    object_id = new_object_id()
    after = int(time.time())

    assert before <= int(object_id[:8], 16) <= after


@pytest.mark.parametrize(
    "value,valid",
    [
        ("6650c3e2a1b2c3d4e5f60718", True),
        ("6650C3E2A1B2C3D4E5F60718", True),
        ("6650c3e2a1b2c3d4e5f6071", False),    # 23 characters
        ("6650c3e2a1b2c3d4e5f607189", False),  # 25 characters
        ("6650c3e2a1b2c3d4e5f6071g", False),   # not hex
        ("0" * 24 + "\n", False),          # trailing newline
        ("", False),
        (None, False),
    ],
)
def test_is_valid_object_id(value, valid):
    assert is_valid_object_id(value) is valid

"""
Tests for API error types and the validation error helper.
"""

import pytest
from pydantic import ValidationError

from library_api.errors import (
    ApiError,
    BookConflictError,
    BookNotFoundError,
    InvalidBookIdError,
    StorageError,
    format_validation_errors,
)
from library_api.schemas import BookCreate


class TestFormatValidationErrors:
    """Tests for format_validation_errors()."""

    def test_request_body_location_is_stripped(self):
        errors = [
            {"loc": ("body", "genre"), "msg": "Input should be 'FICTION'", "type": "enum", "input": "POETRY"},
        ]

        assert format_validation_errors(errors) == {
            "name": "ValidationError",
            "errors": {
                "genre": {
                    "message": "Input should be 'FICTION'",
                    "kind": "enum",
                    "value": "POETRY",
                },
            },
        }

    def test_missing_field_has_no_value(self):
        errors = [{"loc": ("body", "title"), "msg": "Field required", "type": "missing", "input": {}}]

        detail = format_validation_errors(errors)["errors"]["title"]

        assert detail["kind"] == "missing"
        assert detail["value"] is None

    def test_nested_location_is_dotted(self):
        errors = [{"loc": ("body", "items", 0, "title"), "msg": "bad", "type": "value_error", "input": 1}]

        assert list(format_validation_errors(errors)["errors"]) == ["items.0.title"]

    def test_whole_body_error(self):
        errors = [{"loc": ("body",), "msg": "Field required", "type": "missing", "input": None}]

        assert list(format_validation_errors(errors)["errors"]) == ["body"]

    def test_first_error_per_field_wins(self):
        errors = [
            {"loc": ("title",), "msg": "first", "type": "a", "input": ""},
            {"loc": ("title",), "msg": "second", "type": "b", "input": ""},
        ]

        assert format_validation_errors(errors)["errors"]["title"]["message"] == "first"

    def test_model_validation_errors(self):
        """Test errors from model_validate (no 'body' prefix) are translated."""
        with pytest.raises(ValidationError) as exc_info:
            BookCreate.model_validate({"title": None, "genre": "POETRY", "copies": -2})

        errors = format_validation_errors(exc_info.value.errors())["errors"]

        assert set(errors) == {"title", "genre", "copies"}
        assert errors["copies"]["value"] == -2


class TestApiErrors:
    """Tests for the ApiError hierarchy."""

    def test_to_response_without_error_payload(self):
        assert InvalidBookIdError().to_response() == {"success": False, "message": "Invalid book ID"}

    def test_to_response_with_error_payload(self):
        exc = StorageError("Failed to delete book", "connection reset")

        assert exc.status_code == 500
        assert exc.to_response() == {
            "success": False,
            "message": "Failed to delete book",
            "error": "connection reset",
        }

    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (InvalidBookIdError(), 400),
            (BookNotFoundError(), 404),
            (BookConflictError("duplicate"), 409),
            (StorageError("failed", "boom"), 500),
        ],
    )
    def test_status_codes(self, exc, status_code):
        assert exc.status_code == status_code

    def test_status_code_override(self):
        assert ApiError("Gone", status_code=410).status_code == 410

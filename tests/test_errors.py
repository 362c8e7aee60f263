"""Tests for turning request validation failures into client errors."""

import pytest
from fastapi.exceptions import RequestValidationError

from church_site_api.app.core.errors import ErrorKind, validation_error_from


def _error(**fields):
    return RequestValidationError([fields])


def test_missing_body_field():
    error = validation_error_from(_error(type="missing", loc=("body", "title"), msg="Field required"))

    assert error.kind == ErrorKind.MISSING_FIELD
    assert error.status_code == 400
    assert error.message == "Missing required field: title"


def test_empty_required_string_counts_as_missing():
    error = validation_error_from(
        _error(
            type="value_error",
            loc=("body", "content"),
            msg="Value error, Missing required field: content",
            ctx={"error": ValueError("Missing required field: content")},
        )
    )

    assert error.kind == ErrorKind.MISSING_FIELD
    assert error.message == "Missing required field: content"


@pytest.mark.parametrize("err_type", ["datetime_from_date_parsing", "datetime_parsing", "date_from_datetime_parsing"])
def test_unparseable_dates(err_type):
    error = validation_error_from(_error(type=err_type, loc=("body", "start_date"), msg="Input should be a valid datetime"))

    assert error.kind == ErrorKind.INVALID_DATE
    assert error.message == "Invalid start_date format"


def test_validator_message_is_passed_through():
    error = validation_error_from(
        _error(type="value_error", loc=("body",), msg="Value error, End date cannot be before start date")
    )

    assert error.kind == ErrorKind.INVALID_BODY
    assert error.message == "End date cannot be before start date"


def test_malformed_json():
    error = validation_error_from(_error(type="json_invalid", loc=("body", 12), msg="JSON decode error"))

    assert error.kind == ErrorKind.INVALID_BODY
    assert error.message == "Invalid JSON body"


def test_missing_field_reaches_the_client(client):
    response = client.post("/api/info", json={"title": "Uden indhold"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing required field: content"}

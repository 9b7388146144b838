"""Unit tests for error response factories and wire serialization."""

from __future__ import annotations

from webdecode.core.responses import new_bad_request_error_response
from webdecode.core.responses import new_internal_server_error_response
from webdecode.core.responses import new_not_found_error_response
from webdecode.core.responses import new_unprocessable_entity_response
from webdecode.schemas.error import FieldErrors
from webdecode.schemas.error import new_fields_error


def test_bad_request_carries_field_details() -> None:
    got = new_bad_request_error_response("req-1", new_fields_error("body", "Invalid body"))

    assert got.status == 400
    assert got.to_payload() == {
        "id": "req-1",
        "error": {
            "code": "400",
            "message": "Bad Request",
            "details": [{"field": "body", "message": "Invalid body"}],
        },
    }


def test_bad_request_omits_empty_details() -> None:
    got = new_bad_request_error_response("req-1", FieldErrors())

    assert got.to_payload() == {"id": "req-1", "error": {"code": "400", "message": "Bad Request"}}


def test_not_found_has_no_details() -> None:
    got = new_not_found_error_response("req-2")

    assert got.status == 404
    assert got.to_payload() == {"id": "req-2", "error": {"code": "404", "message": "Not Found"}}


def test_unprocessable_entity_uses_caller_code() -> None:
    got = new_unprocessable_entity_response("req-3", "insufficient_funds")

    assert got.status == 422
    assert got.id == "req-3"
    assert got.error.code == "insufficient_funds"
    assert got.error.message == "Unprocessable Entity"
    assert got.error.details is None


def test_internal_server_error_hides_internals() -> None:
    got = new_internal_server_error_response("req-4")

    assert got.status == 500
    assert got.to_payload() == {"id": "req-4", "error": {"code": "500", "message": "Internal Server Error"}}


def test_status_travels_on_the_response_not_in_the_body() -> None:
    response = new_not_found_error_response("req-5").to_response(headers={"X-Request-Id": "req-5"})

    assert response.status_code == 404
    assert response.headers["X-Request-Id"] == "req-5"
    assert b'"status"' not in response.body

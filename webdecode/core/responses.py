"""Factories for the shared error response envelope."""

from __future__ import annotations

from collections.abc import Sequence

from starlette import status

from webdecode.schemas.error import ErrorDetail
from webdecode.schemas.error import ErrorResponse
from webdecode.schemas.error import FieldError


def _build(
    *,
    request_id: str,
    status_code: int,
    code: str,
    message: str,
    details: Sequence[FieldError] | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        status=status_code,
        id=request_id,
        error=ErrorDetail(code=code, message=message, details=list(details) if details else None),
    )


# 400
def new_bad_request_error_response(request_id: str, details: Sequence[FieldError]) -> ErrorResponse:
    return _build(
        request_id=request_id,
        status_code=status.HTTP_400_BAD_REQUEST,
        code="400",
        message="Bad Request",
        details=details,
    )


# 404
def new_not_found_error_response(request_id: str) -> ErrorResponse:
    return _build(
        request_id=request_id,
        status_code=status.HTTP_404_NOT_FOUND,
        code="404",
        message="Not Found",
    )


# 422
def new_unprocessable_entity_response(request_id: str, code: str) -> ErrorResponse:
    return _build(
        request_id=request_id,
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        code=code,
        message="Unprocessable Entity",
    )


# 500
def new_internal_server_error_response(request_id: str) -> ErrorResponse:
    return _build(
        request_id=request_id,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code="500",
        message="Internal Server Error",
    )

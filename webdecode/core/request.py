"""Request body decoding and decode-failure translation."""

from __future__ import annotations

from typing import Protocol
from typing import TypeVar
from typing import runtime_checkable
import logging
import uuid

from starlette.requests import Request

from webdecode.core.config import get_web_settings
from webdecode.core.jsonbody import BODY_FIELD
from webdecode.core.jsonbody import EmptyInput
from webdecode.core.jsonbody import JSONSyntaxError
from webdecode.core.jsonbody import UnexpectedEndOfInput
from webdecode.core.jsonbody import UnmarshalTypeError
from webdecode.core.responses import new_bad_request_error_response
from webdecode.core.responses import new_internal_server_error_response
from webdecode.schemas.error import ErrorResponse
from webdecode.schemas.error import get_field_errors
from webdecode.schemas.error import iter_error_chain
from webdecode.schemas.error import new_fields_error

logger = logging.getLogger(__name__)

ErrorT = TypeVar("ErrorT", bound=BaseException)


class Decoder(Protocol):
    """Turns raw body bytes into a populated structure."""

    def decode(self, data: bytes) -> None: ...


@runtime_checkable
class Validator(Protocol):
    """Optional capability checked after a successful decode."""

    def validate(self) -> None: ...


class RequestError(Exception):
    """Base error raised while turning a request body into a structure."""


class RequestReadError(RequestError):
    """Raised when the request body stream cannot be read."""


class RequestDecodeError(RequestError):
    """Raised when the decoder rejects the request body."""


class RequestValidationFailed(RequestError):
    """Raised when a decoded body fails its own validation."""


async def decode(request: Request, decoder: Decoder) -> None:
    """Read the whole body of ``request`` and decode it with ``decoder``.

    When the decoder also implements :class:`Validator`, ``validate`` runs
    after decoding. Every failure is re-raised as a :class:`RequestError`
    subclass chained to the original exception.
    """
    try:
        data = await request.body()
    except Exception as exc:
        logger.debug("Failed to read request body: %s", exc)
        raise RequestReadError("request: failed to read request body") from exc

    try:
        decoder.decode(data)
    except Exception as exc:
        logger.debug("Failed to decode request body: %s", exc)
        raise RequestDecodeError("request: failed to decode request body") from exc

    if isinstance(decoder, Validator):
        try:
            decoder.validate()
        except Exception as exc:
            logger.debug("Request body failed validation: %s", exc)
            raise RequestValidationFailed("request: failed to validate request body") from exc


def get_request_id(request: Request) -> str:
    """Return the caller-supplied correlation ID, or a fresh one."""
    header = get_web_settings().request_id_header
    request_id = request.headers.get(header)
    if request_id:
        return request_id
    return str(uuid.uuid4())


def _find(err: BaseException, error_type: type[ErrorT]) -> ErrorT | None:
    for item in iter_error_chain(err):
        if isinstance(item, error_type):
            return item
    return None


def decode_json_error_to_response(request_id: str, err: BaseException | None) -> ErrorResponse:
    """Map a JSON decode failure to an error response; never raises."""
    if err is None:
        return new_internal_server_error_response(request_id)
    if _find(err, JSONSyntaxError) is not None:
        return new_bad_request_error_response(request_id, new_fields_error(BODY_FIELD, "Invalid body"))
    if _find(err, UnexpectedEndOfInput) is not None:
        return new_bad_request_error_response(request_id, new_fields_error(BODY_FIELD, "Invalid body"))
    type_error = _find(err, UnmarshalTypeError)
    if type_error is not None:
        return new_bad_request_error_response(
            request_id,
            new_fields_error(type_error.field, "Invalid value type for field"),
        )
    if _find(err, EmptyInput) is not None:
        return new_bad_request_error_response(request_id, new_fields_error(BODY_FIELD, "Empty body"))
    return new_internal_server_error_response(request_id)


def error_to_response(request_id: str, err: BaseException | None) -> ErrorResponse:
    """Like :func:`decode_json_error_to_response`, but field errors become a 400 too."""
    field_errors = get_field_errors(err)
    if field_errors:
        return new_bad_request_error_response(request_id, field_errors)
    return decode_json_error_to_response(request_id, err)

"""JSON body decoding with typed failure classification."""

from __future__ import annotations

from dataclasses import fields
from functools import lru_cache
from typing import Any
import json

from pydantic import TypeAdapter
from pydantic import ValidationError

from webdecode.schemas.error import FieldError
from webdecode.schemas.error import FieldErrors

BODY_FIELD = "body"


class JSONDecodeFailure(ValueError):
    """Base error for request bodies that cannot be decoded as JSON."""


class JSONSyntaxError(JSONDecodeFailure):
    """Raised when the body is not well-formed JSON."""

    def __init__(self, msg: str, offset: int) -> None:
        super().__init__(f"invalid JSON at offset {offset}: {msg}")
        self.msg = msg
        self.offset = offset


class UnexpectedEndOfInput(JSONDecodeFailure):
    """Raised when the body ends in the middle of a JSON value."""

    def __init__(self) -> None:
        super().__init__("unexpected end of JSON input")


class UnmarshalTypeError(JSONDecodeFailure):
    """Raised when a JSON value does not fit the type of its target field."""

    def __init__(self, field: str, kind: str) -> None:
        super().__init__(f"cannot decode value for field {field!r} ({kind})")
        self.field = field
        self.kind = kind


class EmptyInput(JSONDecodeFailure):
    """Raised when the body holds no JSON document at all."""

    def __init__(self) -> None:
        super().__init__("empty JSON input")


def load_json(data: bytes) -> Any:
    """Parse ``data`` as JSON, raising a ``JSONDecodeFailure`` subclass on error."""
    if not data.strip():
        raise EmptyInput()

    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        if exc.pos >= len(exc.doc.rstrip()):
            raise UnexpectedEndOfInput() from exc
        raise JSONSyntaxError(exc.msg, exc.pos) from exc
    except UnicodeDecodeError as exc:
        raise JSONSyntaxError("invalid UTF-8 in body", exc.start) from exc
    except RecursionError as exc:
        raise JSONSyntaxError("document nested too deeply", 0) from exc


def _format_location(location: tuple[Any, ...] | list[Any]) -> str:
    # list indices are dropped
    parts = [str(part) for part in location if not isinstance(part, int)]
    if not parts:
        return BODY_FIELD
    return ".".join(parts)


_MISMATCH_ERROR_TYPES = frozenset({"int_from_float", "finite_number"})


def _is_type_mismatch(error_type: str) -> bool:
    return (
        error_type.endswith("_type")
        or error_type.endswith("_parsing")
        or error_type in _MISMATCH_ERROR_TYPES
    )


def _translate_validation_error(exc: ValidationError) -> JSONDecodeFailure | FieldErrors:
    issues = exc.errors()
    for issue in issues:
        if issue["type"] == "json_invalid":
            return JSONSyntaxError(str(issue.get("msg", "invalid JSON")), 0)
    for issue in issues:
        if _is_type_mismatch(issue["type"]):
            return UnmarshalTypeError(_format_location(issue["loc"]), issue["type"])

    return FieldErrors(
        FieldError(field=_format_location(issue["loc"]), message=str(issue.get("msg", "Invalid value")))
        for issue in issues
    )


@lru_cache(maxsize=None)
def _adapter_for(target: type) -> TypeAdapter[Any]:
    return TypeAdapter(target)


class JSONDecoder:
    """Mixin that lets a dataclass decode a JSON body into itself.

    Fields are validated strictly with pydantic against their annotations, so
    ``"36"`` is rejected for an ``int`` field rather than coerced. Unknown keys
    are ignored. Fields absent from the body keep their current values but
    still need a default to pass validation.

    Example::

        @dataclass
        class CreateUser(JSONDecoder):
            name: str = ""

            def validate(self) -> None:
                if not self.name:
                    raise new_fields_error("name", "Name is required")
    """

    def decode(self, data: bytes) -> None:
        payload = load_json(data)
        try:
            decoded = _adapter_for(type(self)).validate_json(data, strict=True)
        except ValidationError as exc:
            raise _translate_validation_error(exc) from exc

        present = payload.keys() if isinstance(payload, dict) else ()
        for field in fields(self):
            if field.name in present:
                setattr(self, field.name, getattr(decoded, field.name))

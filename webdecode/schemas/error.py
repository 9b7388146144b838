"""Error envelope schemas shared across request handlers."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import TypeAdapter
from starlette.responses import JSONResponse


class FieldError(BaseModel):
    """Single field-level rejection detail."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


_FIELD_ERRORS_ADAPTER = TypeAdapter(list[FieldError])


class FieldErrors(Exception, Sequence[FieldError]):
    """Ordered field errors that can also be raised as an exception."""

    def __init__(self, errors: Iterable[FieldError] = ()) -> None:
        self._errors = tuple(errors)
        super().__init__(*self._errors)

    def __getitem__(self, index):
        return self._errors[index]

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[FieldError]:
        return iter(self._errors)

    def __str__(self) -> str:
        return _FIELD_ERRORS_ADAPTER.dump_json(list(self._errors)).decode()

    def __repr__(self) -> str:
        return f"FieldErrors({list(self._errors)!r})"


def new_fields_error(field: str, message: str) -> FieldErrors:
    """Build a field error list holding a single entry."""
    return FieldErrors([FieldError(field=field, message=message)])


def iter_error_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and every exception it was raised from, outermost first."""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__ if err.__cause__ is not None else err.__context__


def get_field_errors(err: BaseException | None) -> FieldErrors | None:
    """Return the first ``FieldErrors`` found in the exception chain."""
    for item in iter_error_chain(err):
        if isinstance(item, FieldErrors):
            return item
    return None


def is_field_errors(err: BaseException | None) -> bool:
    return get_field_errors(err) is not None


class ErrorDetail(BaseModel):
    """Canonical error payload object."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    details: list[FieldError] | None = None


class ErrorResponse(BaseModel):
    """Top-level error response envelope.

    ``status`` travels as the HTTP status code and is never part of the body.
    """

    model_config = ConfigDict(frozen=True)

    status: int = Field(exclude=True)
    id: str
    error: ErrorDetail

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_response(self, headers: dict[str, str] | None = None) -> JSONResponse:
        return JSONResponse(status_code=self.status, content=self.to_payload(), headers=headers)

"""Exception handler registration for the shared error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.responses import JSONResponse

from webdecode.core.config import get_web_settings
from webdecode.core.request import RequestError
from webdecode.core.request import error_to_response
from webdecode.core.request import get_request_id

logger = logging.getLogger(__name__)


async def request_error_handler(request: Request, exc: RequestError) -> JSONResponse:
    """Translate request decoding failures into the shared envelope."""

    request_id = get_request_id(request)
    response = error_to_response(request_id, exc)

    if response.status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "Request %s %s failed with an unrecognized error (request_id=%s)",
            request.method,
            request.url.path,
            request_id,
            exc_info=exc,
        )
    else:
        logger.warning(
            "Rejected request body for %s %s (request_id=%s): %s",
            request.method,
            request.url.path,
            request_id,
            response.error.details,
        )

    return response.to_response(headers={get_web_settings().request_id_header: request_id})


def register_error_handlers(app: FastAPI) -> None:
    """Attach the request decoding error handler to a FastAPI app instance."""

    app.add_exception_handler(RequestError, request_error_handler)

"""FastAPI application entrypoint for webdecode."""

import logging

from fastapi import FastAPI

from webdecode.core.config import get_web_settings
from webdecode.core.errors import register_error_handlers

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build an application with the shared error handlers registered."""
    logger.info("Creating app with settings=%s", get_web_settings().safe_for_logging())

    application = FastAPI(title="webdecode")
    register_error_handlers(application)

    @application.get("/health")
    def health() -> dict[str, str]:
        """Health check stub endpoint for service readiness."""
        return {"status": "ok"}

    return application


app = create_app()

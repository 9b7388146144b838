"""Shared pytest fixtures for webdecode test suites."""

from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Generator
from pathlib import Path
from typing import Any
import sys

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None, None, None]:
    """Reload environment-driven settings for every test."""
    from webdecode.core.config import get_web_settings

    get_web_settings.cache_clear()
    yield
    get_web_settings.cache_clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide an API test client for the application factory."""
    from webdecode.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def build_request() -> Callable[..., Request]:
    """Return a factory for bare Starlette POST requests."""

    def _build(
        body: bytes = b"",
        *,
        headers: dict[str, str] | None = None,
        receive: Callable[[], Awaitable[dict[str, Any]]] | None = None,
    ) -> Request:
        async def _receive() -> dict[str, Any]:
            return {"type": "http.request", "body": body, "more_body": False}

        scope = {
            "type": "http",
            "method": "POST",
            "path": "/",
            "query_string": b"",
            "headers": [(key.lower().encode(), value.encode()) for key, value in (headers or {}).items()],
        }
        return Request(scope, receive or _receive)

    return _build

"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_REQUEST_ID_HEADER = "X-Request-Id"


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class WebSettings:
    """Runtime settings for request decoding and error responses."""

    request_id_header: str

    def safe_for_logging(self) -> dict[str, str]:
        """Return web settings safe for logs."""
        return {
            "request_id_header": self.request_id_header,
        }


@lru_cache(maxsize=1)
def get_web_settings() -> WebSettings:
    """Load web settings from the environment."""
    return WebSettings(
        request_id_header=_get_str_env("WEBDECODE_REQUEST_ID_HEADER", DEFAULT_REQUEST_ID_HEADER),
    )

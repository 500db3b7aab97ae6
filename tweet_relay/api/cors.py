"""
CORS helpers for the relay endpoint.

The endpoint only ever accepts POST, so the answers are fixed: a real
preflight gets the allow-* headers (echoing the requested headers), any
other OPTIONS request just learns which method is allowed.
"""

from typing import Mapping

from ..core.config import CorsConfig

ALLOWED_METHODS = "POST"

PREFLIGHT_HEADERS = (
    "origin",
    "access-control-request-method",
    "access-control-request-headers",
)


def is_preflight(headers: Mapping[str, str]) -> bool:
    """True when an OPTIONS request carries every preflight header."""
    return all(headers.get(name) is not None for name in PREFLIGHT_HEADERS)


def preflight_headers(headers: Mapping[str, str], cors: CorsConfig) -> dict[str, str]:
    """Headers answering an OPTIONS request."""
    if not is_preflight(headers):
        return {"Allow": ALLOWED_METHODS}

    return {
        "Access-Control-Allow-Origin": cors.allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Max-Age": str(cors.max_age),
        "Access-Control-Allow-Headers": headers["access-control-request-headers"],
    }


def response_headers(cors: CorsConfig) -> dict[str, str]:
    """CORS headers attached to every POST response."""
    return {
        "Access-Control-Allow-Origin": cors.allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
    }

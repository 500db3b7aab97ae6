"""
FastAPI Application Entry Point

Configures the tweet relay: a single endpoint that takes a base64 image,
posts it to Twitter with a fixed status text and answers with the public
URL of the posted media.

Run with: uvicorn tweet_relay.main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from .api.cors import ALLOWED_METHODS, response_headers
from .api.routes import router
from .clients.twitter import UpstreamError
from .core.config import ConfigurationError, Settings, settings as default_settings
from .core.utils import configure_logging, get_timestamp, mask_secret

# Configure logging
configure_logging(default_settings.log_level)
logger = logging.getLogger(__name__)


# ============================================================
# Application Lifespan Handler
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Logs the effective configuration on startup. Missing credentials
    are reported but do not stop the service from starting.
    """
    settings: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info("TWEET RELAY STARTING")
    logger.info("=" * 60)
    logger.info(f"API Version: {settings.api_version}")
    logger.info(f"Upstream: {settings.upstream.api_base}")
    logger.info(f"Upstream timeout: {settings.upstream.timeout}s")
    logger.info(f"CORS origin: {settings.cors.allow_origin}")

    try:
        credentials = settings.credentials()
        logger.info(f"✓ Credentials loaded for API key {mask_secret(credentials.api_key)}")
    except ConfigurationError as e:
        logger.warning(f"⚠ {e}")

    logger.info("=" * 60)

    yield  # Application runs here

    # ---- Shutdown ----
    logger.info("Relay shutting down...")


# ============================================================
# Exception Handlers
# ============================================================

def _error_response(
    request: Request, status_code: int, error: str, detail
) -> JSONResponse:
    """Build a JSON error body, with CORS headers on POST responses."""
    headers = None
    if request.method == "POST":
        headers = response_headers(request.app.state.settings.cors)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "detail": detail,
            "timestamp": get_timestamp()
        },
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
):
    """
    Handle validation errors with a clean response.

    Returns 422 with details about what failed validation.
    """
    logger.warning(f"Validation error: {len(exc.errors())} error(s)")
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation failed",
        jsonable_encoder(exc.errors(), exclude={"input"}),
    )


async def configuration_exception_handler(request: Request, exc: ConfigurationError):
    """Credentials are missing; nothing was sent upstream."""
    logger.error(str(exc))
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Service not configured",
        "Upstream credentials are not available.",
    )


async def upstream_exception_handler(request: Request, exc: UpstreamError):
    """The upstream API failed or answered with something unusable."""
    logger.error(f"Upstream failure (status {exc.status_code}): {exc}")
    return _error_response(
        request,
        status.HTTP_502_BAD_GATEWAY,
        "Upstream request failed",
        str(exc),
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Last-resort handler so unexpected errors still produce a JSON body.
    """
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "An unexpected error occurred. Please try again.",
    )


# ============================================================
# Middleware
# ============================================================

RELAY_PATH = "/"
RELAY_METHODS = ("POST", "OPTIONS")


async def method_guard_middleware(request: Request, call_next):
    """Answer every method the relay does not serve with an empty 405."""
    if request.url.path == RELAY_PATH and request.method not in RELAY_METHODS:
        return Response(
            status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
            headers={"Allow": ALLOWED_METHODS},
        )
    return await call_next(request)


# ============================================================
# FastAPI Application Factory
# ============================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the relay application.

    Args:
        settings: Configuration to serve with; the environment-derived
            global settings when omitted
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.settings = settings

    app.middleware("http")(method_guard_middleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ConfigurationError, configuration_exception_handler)
    app.add_exception_handler(UpstreamError, upstream_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(router, tags=["Relay"])

    return app


app = create_app()


# ============================================================
# Run Configuration (for direct execution)
# ============================================================

if __name__ == "__main__":
    import uvicorn

    print("=" * 60)
    print("TWEET RELAY")
    print("=" * 60)
    print(f"Binding to 0.0.0.0:{default_settings.server_port}")
    print(f"Docs: http://localhost:{default_settings.server_port}/docs")
    print("=" * 60)

    uvicorn.run(
        "tweet_relay.main:app",
        host="0.0.0.0",
        port=default_settings.server_port,
        reload=False,
        workers=1,
        log_level=default_settings.log_level.lower()
    )

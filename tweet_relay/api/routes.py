"""
API Routes - The relay endpoint and its CORS front door.

- OPTIONS /: CORS preflight (or a plain "Allow: POST" answer)
- POST /: Upload an image, post it, return the media URL
- anything else on /: 405 (see the method guard in main.py)
- GET /health: Configuration-level health check

The relay is stateless: every POST builds its own signed client and
closes it when the response is ready.
"""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Request, Response, status

from .cors import preflight_headers, response_headers
from ..clients.twitter import TwitterClient
from ..core.config import Settings
from ..core.utils import get_timestamp
from ..models.schemas import (
    ErrorResponse,
    HealthResponse,
    UploadRequest,
    UploadResponse,
)
from ..services.publisher import publish_image

# Configure logging
logger = logging.getLogger(__name__)

# Create the router
router = APIRouter()


# ============================================================
# Dependencies
# ============================================================

def get_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


async def get_twitter_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[TwitterClient]:
    """
    Yield a signed client for the duration of one request.

    Raises ConfigurationError before any upstream call when
    credentials are missing.
    """
    client = TwitterClient.from_credentials(
        settings.credentials(), upstream=settings.upstream
    )
    try:
        yield client
    finally:
        await client.aclose()


# ============================================================
# Relay Endpoints
# ============================================================

@router.options(
    "/",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="CORS preflight",
)
async def preflight(
    request: Request, settings: Settings = Depends(get_settings)
) -> Response:
    """Answer CORS preflight requests for the relay endpoint."""
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=preflight_headers(request.headers, settings.cors),
    )


@router.post(
    "/",
    response_model=UploadResponse,
    summary="Post an image",
    description="""
    Upload a base64 encoded image and post it in a status update.

    The image is sent to the media upload endpoint first; the returned
    media handle is then attached to a status update. The response holds
    the public display URL of the posted media.
    """,
    responses={
        200: {"description": "Image posted"},
        422: {"description": "Body is not a JSON object with base64 data"},
        500: {"model": ErrorResponse, "description": "Service not configured"},
        502: {"model": ErrorResponse, "description": "Upstream call failed"},
    },
)
async def post_image(
    payload: UploadRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
    client: TwitterClient = Depends(get_twitter_client),
) -> UploadResponse:
    """
    Relay an image to the upstream platform.

    Upstream failures propagate as UpstreamError and are rendered
    by the application's exception handler.
    """
    logger.info("Received image relay request")

    url = await publish_image(client, payload.data, settings.upstream.status_text)

    response.headers.update(response_headers(settings.cors))
    return UploadResponse(url=url)


# ============================================================
# Utility Endpoints
# ============================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report whether the relay has the credentials it needs.",
)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Perform a health check.

    Never calls upstream; a missing credential reports "degraded".
    """
    configured = settings.credentials_configured

    return HealthResponse(
        status="healthy" if configured else "degraded",
        service="tweet-relay",
        version=settings.api_version,
        credentials_configured=configured,
        timestamp=get_timestamp(),
    )

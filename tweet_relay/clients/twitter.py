"""
Twitter Client - Signed calls to the v1.1 media and status endpoints.

Every request is a form-encoded POST signed with OAuth 1.0a. The client
performs no retries: a failed call surfaces as UpstreamError and the
caller decides what to tell its own client.
"""

import logging
from typing import Any, Literal, Optional

import httpx
from pydantic import BaseModel, ValidationError

from ..auth.oauth1 import Consumer, OAuth1Signer, Token, encode_form
from ..core.config import TwitterCredentials, UpstreamConfig, settings
from ..core.utils import truncate_string
from ..models.schemas import MediaUploadResponse, StatusUpdateResponse

# Configure logging
logger = logging.getLogger(__name__)

Subdomain = Literal["api", "upload"]


class UpstreamError(Exception):
    """
    Raised when the upstream API call fails or returns an unusable payload.

    Attributes:
        status_code: Upstream HTTP status, 0 when no response was received
        body: Raw (truncated) response body, if any
        errors: Messages extracted from the upstream "errors" array
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        body: str = "",
        errors: Optional[list[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.errors = errors or []

    def __str__(self) -> str:
        if self.errors:
            return f"{self.message}: {'; '.join(self.errors)}"
        return self.message


def _extract_errors(payload: Any) -> list[str]:
    """Pull human-readable messages out of an upstream error payload."""
    if not isinstance(payload, dict):
        return []
    messages = []
    for item in payload.get("errors") or []:
        if isinstance(item, dict):
            code = item.get("code")
            text = item.get("message", "")
            messages.append(f"[{code}] {text}" if code is not None else str(text))
        else:
            messages.append(str(item))
    if not messages and payload.get("error"):
        messages.append(str(payload["error"]))
    return messages


class TwitterClient:
    """
    Minimal client for the two calls the relay makes.

    One httpx.AsyncClient is held per instance; use it as an async
    context manager or call aclose() when done.
    """

    def __init__(
        self,
        signer: OAuth1Signer,
        api_base: str = "https://{subdomain}.twitter.com/1.1",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.signer = signer
        self.api_base = api_base.rstrip("/")
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_credentials(
        cls,
        credentials: TwitterCredentials,
        upstream: Optional[UpstreamConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "TwitterClient":
        """Build a client from a credential set and an upstream config."""
        upstream = upstream or settings.upstream
        signer = OAuth1Signer(
            consumer=Consumer(credentials.api_key, credentials.api_secret),
            token=Token(credentials.access_token, credentials.access_token_secret),
        )
        return cls(
            signer,
            api_base=upstream.api_base,
            timeout=upstream.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TwitterClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def url_for(self, subdomain: Subdomain, resource: str) -> str:
        """Resolve the absolute URL of a resource on the given subdomain."""
        base = self.api_base.format(subdomain=subdomain)
        return f"{base}/{resource.lstrip('/')}"

    async def post(
        self,
        subdomain: Subdomain,
        resource: str,
        data: dict[str, Optional[str]],
    ) -> Any:
        """
        Send a signed, form-encoded POST and return the decoded JSON body.

        Fields whose value is None are omitted from both the body and the
        signature.

        Raises:
            UpstreamError: on transport failure, non-2xx status or a body
                that is not JSON
        """
        method = "POST"
        url = self.url_for(subdomain, resource)
        body = encode_form(data)

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
            **self.signer.sign(method, url, body),
        }

        try:
            response = await self._http.request(
                method, url, content=body, headers=headers
            )
        except httpx.TimeoutException:
            logger.error(f"Timeout calling {url}")
            raise UpstreamError(f"Timed out calling {resource}")
        except httpx.HTTPError as e:
            logger.error(f"Transport error calling {url}: {str(e)}")
            raise UpstreamError(f"Could not reach {resource}: {str(e)}")

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.is_success:
            body = truncate_string(response.text, 500)
            logger.error(
                f"Upstream call {resource} failed: "
                f"Status {response.status_code}, Body: {body}"
            )
            raise UpstreamError(
                f"{resource} returned {response.status_code}",
                status_code=response.status_code,
                body=body,
                errors=_extract_errors(payload),
            )

        if payload is None:
            raise UpstreamError(
                f"{resource} returned a non-JSON body",
                status_code=response.status_code,
                body=truncate_string(response.text, 500),
            )

        logger.debug(f"Upstream call {resource} succeeded ({response.status_code})")
        return payload

    async def upload_media(self, media: str) -> MediaUploadResponse:
        """
        Upload a base64 encoded image.

        Args:
            media: Base64 encoded image bytes

        Returns:
            The upload response with the media handle
        """
        payload = await self.post("upload", "media/upload.json", {"media": media})
        return self._parse(MediaUploadResponse, payload, "media/upload.json")

    async def update_status(
        self, status: str, media_id: Optional[str] = None
    ) -> StatusUpdateResponse:
        """
        Post a status update, optionally attaching previously uploaded media.

        Args:
            status: Status text
            media_id: media_id_string from a prior upload
        """
        payload = await self.post(
            "api",
            "statuses/update.json",
            {"status": status, "media_ids": media_id},
        )
        return self._parse(StatusUpdateResponse, payload, "statuses/update.json")

    @staticmethod
    def _parse(model: type[BaseModel], payload: Any, resource: str):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected payload from {resource}: {e.error_count()} errors")
            raise UpstreamError(f"{resource} returned an unexpected payload")

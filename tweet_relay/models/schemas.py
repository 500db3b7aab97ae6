"""
Pydantic models for request/response validation.

Defines the contract of the relay endpoint and the subset of the upstream
payloads the relay relies on. Upstream responses carry many more fields;
anything not declared here is ignored.
"""

import base64
import binascii
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================
# Request Models
# ============================================================

class UploadRequest(BaseModel):
    """
    Body accepted by POST /.

    Attributes:
        data: The image file, base64 encoded
    """
    data: str = Field(
        ...,
        min_length=1,
        description="Base64 encoded image",
        examples=["iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"],
    )

    @field_validator("data")
    @classmethod
    def must_be_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("data must be a base64 encoded image")
        return value


# ============================================================
# Response Models
# ============================================================

class UploadResponse(BaseModel):
    """Public URL of the media attached to the posted status."""
    url: str = Field(
        ...,
        description="Display URL of the posted media",
        examples=["pic.twitter.com/AbCdEf123"],
    )


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    service: str = "tweet-relay"
    version: str
    credentials_configured: bool
    timestamp: str


class ErrorResponse(BaseModel):
    """Generic error response; validation failures carry a list of errors."""
    error: str
    detail: Union[str, list[dict[str, Any]], None] = None
    timestamp: str


# ============================================================
# Upstream Models
# ============================================================

class ImageInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    image_type: str
    w: int
    h: int


class MediaUploadResponse(BaseModel):
    """Response of media/upload.json."""
    model_config = ConfigDict(extra="ignore")

    media_id: int
    media_id_string: str
    size: Optional[int] = None
    expires_after_secs: Optional[int] = None
    image: Optional[ImageInfo] = None


class MediaEntity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    display_url: str


class StatusEntities(BaseModel):
    model_config = ConfigDict(extra="ignore")

    media: list[MediaEntity] = Field(default_factory=list)


class StatusUpdateResponse(BaseModel):
    """Minimal view of statuses/update.json; the real payload is much larger."""
    model_config = ConfigDict(extra="ignore")

    id_str: Optional[str] = None
    entities: StatusEntities = Field(default_factory=StatusEntities)

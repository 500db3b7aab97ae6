"""
Models module containing Pydantic schemas.
"""

from .schemas import (
    UploadRequest,
    UploadResponse,
    HealthResponse,
    ErrorResponse,
    MediaUploadResponse,
    StatusUpdateResponse,
)

__all__ = [
    "UploadRequest",
    "UploadResponse",
    "HealthResponse",
    "ErrorResponse",
    "MediaUploadResponse",
    "StatusUpdateResponse",
]

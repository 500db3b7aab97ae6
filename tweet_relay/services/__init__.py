"""
Services module containing the relay's business logic.
"""

from .publisher import publish_image

__all__ = ["publish_image"]

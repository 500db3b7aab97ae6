"""
Clients module for upstream API access.
"""

from .twitter import TwitterClient, UpstreamError

__all__ = ["TwitterClient", "UpstreamError"]

"""
Core module containing configuration and utilities.
"""

from .config import settings, Settings, ConfigurationError, TwitterCredentials
from .utils import configure_logging, get_timestamp, mask_secret

__all__ = [
    "settings",
    "Settings",
    "ConfigurationError",
    "TwitterCredentials",
    "get_timestamp",
    "configure_logging",
    "mask_secret",
]

"""
Shared utility functions for the tweet relay.

Contains helpers used across modules: timestamps, logging setup and
log-safe rendering of secrets and large payloads.
"""

import logging
import sys
import time
from datetime import datetime, timezone


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        ISO-formatted UTC timestamp string
    """
    return datetime.now(timezone.utc).isoformat()


def get_unix_timestamp() -> int:
    """
    Get current Unix timestamp in whole seconds.

    Returns:
        Seconds since epoch, truncated
    """
    return int(time.time())


def configure_logging(level: str) -> None:
    """
    Configure root logging once and apply the requested level.

    The level is set even when logging was already configured, so
    whichever entry point runs first cannot pin it.

    Args:
        level: Level name such as "INFO" or "DEBUG"
    """
    logging.basicConfig(
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.getLogger().setLevel(level)


def mask_secret(value: str, visible: int = 4) -> str:
    """
    Mask a secret for logging, keeping only its first characters.

    Args:
        value: Secret to mask
        visible: Number of leading characters to keep

    Returns:
        Masked string, fully masked when the secret is short
    """
    if len(value) <= visible:
        return "****"
    return value[:visible] + "*" * (len(value) - visible)


def truncate_string(s: str, max_length: int = 100) -> str:
    """
    Truncate a string to a maximum length for logging.

    Args:
        s: String to truncate
        max_length: Maximum allowed length

    Returns:
        Original string if short enough, otherwise truncated with ellipsis
    """
    if len(s) <= max_length:
        return s
    return s[:max_length - 3] + "..."

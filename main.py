"""
Unified Entry Point for Cloud Server Deployment

Starts the tweet relay under uvicorn, binding to the PORT the hosting
platform provides.
"""

import logging

from tweet_relay.core.config import settings
from tweet_relay.core.utils import configure_logging

# Configure logging
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


def main():
    """Run the relay API server."""
    import uvicorn
    from tweet_relay.main import app

    print("=" * 70)
    print("TWEET RELAY - STARTUP")
    print("=" * 70)

    # Cloud servers set PORT env var - use it if available
    logger.info(f"Starting FastAPI server on 0.0.0.0:{settings.server_port}...")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.server_port,
        log_level=settings.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    main()

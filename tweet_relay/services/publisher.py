"""
Publisher - The upload-then-post sequence behind the relay endpoint.

1. Upload the image to the media endpoint to obtain a media handle
2. Post a status update with that handle attached
3. Hand back the display URL of the attached media
"""

import logging

from ..clients.twitter import TwitterClient, UpstreamError

logger = logging.getLogger(__name__)


async def publish_image(client: TwitterClient, media: str, status_text: str) -> str:
    """
    Upload an image and post it in a status update.

    Args:
        client: Signed upstream client
        media: Base64 encoded image
        status_text: Text of the status update

    Returns:
        The display URL of the posted media

    Raises:
        UpstreamError: if either call fails or the posted status
            carries no media entity
    """
    logger.info(f"Uploading media ({len(media)} base64 chars)")
    upload = await client.upload_media(media)
    logger.info(f"Media uploaded: media_id={upload.media_id_string}")

    status = await client.update_status(status_text, upload.media_id_string)
    if not status.entities.media:
        logger.error(
            f"Status {status.id_str} posted without media entity "
            f"(media_id={upload.media_id_string})"
        )
        raise UpstreamError("statuses/update.json returned no media entity")

    url = status.entities.media[0].display_url
    logger.info(f"Status {status.id_str} posted with media at {url}")
    return url

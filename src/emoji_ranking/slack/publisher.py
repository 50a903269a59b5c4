"""Report posting."""

import logging

from slack_sdk.web.async_client import AsyncWebClient

logger = logging.getLogger(__name__)


async def post_report(
    client: AsyncWebClient,
    channel_id: str,
    text: str,
    empty_text: str = "",
) -> None:
    """Post the ranking report into ``channel_id``.

    Unlike thread notifications, a failed post is not swallowed: SlackApiError
    propagates so the scheduler sees the run as failed.

    Args:
        client: Slack client.
        channel_id: Destination channel ID.
        text: Formatted report; may be empty.
        empty_text: Sent instead of an empty report, since Slack rejects empty text.
    """
    body = text or empty_text
    await client.chat_postMessage(channel=channel_id, text=body)
    logger.info(
        "Report posted",
        extra={"channel_id": channel_id, "lines": len(text.splitlines())},
    )

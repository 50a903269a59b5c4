"""Channel enumeration."""

import logging

from slack_sdk.web.async_client import AsyncWebClient

from emoji_ranking.slack.pagination import PAGE_SIZE

logger = logging.getLogger(__name__)

CHANNEL_TYPES = "public_channel,private_channel,mpim,im"


async def list_channels(client: AsyncWebClient) -> list[str]:
    """Return the IDs of every non-archived conversation the bot can see.

    Requests public and private channels, group DMs, and DMs in a single page
    of up to 1000 conversations. Slack errors propagate: the ranking is never
    built from an incomplete channel set.
    """
    response = await client.conversations_list(
        types=CHANNEL_TYPES,
        exclude_archived=True,
        limit=PAGE_SIZE,
    )
    channel_ids = [channel["id"] for channel in response.get("channels") or []]
    logger.info("Listed channels", extra={"channels": len(channel_ids)})
    return channel_ids

"""Channel history and thread reply retrieval.

Both functions drain pagination completely before returning, so callers see
either the full message list or an exception, never a truncated list.
"""

import logging

from slack_sdk.web.async_client import AsyncWebClient

from emoji_ranking.models.slack import Message
from emoji_ranking.slack.pagination import PAGE_SIZE, iter_pages

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 200


def _format_ts(timestamp: float) -> str:
    """Render epoch seconds in Slack's ts format ("1234567890.123456")."""
    return f"{timestamp:.6f}"


async def fetch_history(
    client: AsyncWebClient,
    channel_id: str,
    oldest: float,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> list[Message]:
    """Fetch every message in a channel newer than ``oldest``.

    Args:
        client: Slack client.
        channel_id: Conversation ID.
        oldest: Cutoff as epoch seconds.
        max_pages: Pagination cap (see iter_pages).

    Returns:
        Messages of all pages, concatenated in the order the API returned them.
    """
    messages: list[Message] = []
    async for page in iter_pages(
        client.conversations_history,
        max_pages,
        channel=channel_id,
        oldest=_format_ts(oldest),
        limit=PAGE_SIZE,
    ):
        messages.extend(Message.from_api(raw) for raw in page.get("messages") or [])

    logger.info(
        "Fetched channel history",
        extra={"channel_id": channel_id, "messages": len(messages)},
    )
    return messages


async def fetch_replies(
    client: AsyncWebClient,
    channel_id: str,
    thread_ts: str,
    oldest: float,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> list[Message]:
    """Fetch the replies of one thread newer than ``oldest``, excluding the parent."""
    replies: list[Message] = []
    async for page in iter_pages(
        client.conversations_replies,
        max_pages,
        channel=channel_id,
        ts=thread_ts,
        oldest=_format_ts(oldest),
        limit=PAGE_SIZE,
    ):
        for raw in page.get("messages") or []:
            # conversations.replies includes the parent message on every thread
            if raw.get("ts") == thread_ts:
                continue
            replies.append(Message.from_api(raw))
    return replies

"""Monthly ranking run: aggregate, format, and publish.

This is the single callable surface invoked by the scheduler, either through
the ``POST /ranking`` endpoint or ``python -m emoji_ranking``. Any failure
propagates; nothing is posted unless the whole pipeline succeeds.
"""

import logging
from datetime import datetime

from slack_sdk.web.async_client import AsyncWebClient

from emoji_ranking.config import Settings, get_settings
from emoji_ranking.ranking.aggregator import aggregate
from emoji_ranking.ranking.formatter import format_report
from emoji_ranking.slack.client import get_slack_client
from emoji_ranking.slack.publisher import post_report

logger = logging.getLogger(__name__)


async def run_ranking_and_publish(
    settings: Settings | None = None,
    client: AsyncWebClient | None = None,
    now: datetime | None = None,
) -> None:
    """Build the emoji ranking for the trailing month and post it to the report channel.

    Args:
        settings: Configuration; defaults to the cached application settings.
        client: Slack client; defaults to one built from ``settings.slack_bot_token``.
        now: Reference time for the one-month window; defaults to the current time.
    """
    if settings is None:
        settings = get_settings()
    if client is None:
        client = await get_slack_client(settings)

    try:
        entries = await aggregate(client, settings, now=now)
        text = format_report(entries)
        await post_report(
            client,
            settings.report_channel_id,
            text,
            empty_text=settings.empty_report_text,
        )
    except Exception:
        logger.exception("Emoji ranking run failed")
        raise

    logger.info("Emoji ranking run completed", extra={"entries": len(entries)})

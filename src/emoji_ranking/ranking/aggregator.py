"""Emoji count aggregation across all channels and reduction to a ranked top-N list.

Channels are processed one at a time in enumeration order, and pages within a
channel one at a time; the count table is owned by a single aggregate() call.
"""

import calendar
import logging
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from zoneinfo import ZoneInfo

from slack_sdk.web.async_client import AsyncWebClient

from emoji_ranking.config import Settings
from emoji_ranking.models.ranking import RankedEntry
from emoji_ranking.models.slack import Message
from emoji_ranking.ranking.extractor import extract
from emoji_ranking.slack.channels import list_channels
from emoji_ranking.slack.history import fetch_history, fetch_replies

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10


def one_month_before(moment: datetime) -> datetime:
    """Return the same wall-clock time one calendar month earlier.

    A day-of-month that does not exist in the previous month is clamped to that
    month's last day (March 31 -> February 28 or 29).
    """
    if moment.month == 1:
        year, month = moment.year - 1, 12
    else:
        year, month = moment.year, moment.month - 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def compute_cutoff(now: datetime | None = None, tz: str = "Asia/Tokyo") -> float:
    """Return the start of the trailing one-month window as epoch seconds."""
    if now is None:
        now = datetime.now(ZoneInfo(tz))
    return one_month_before(now).timestamp()


def merge_increment(table: Counter, token: str, amount: int) -> Counter:
    """Add ``amount`` to ``token`` in the count table and return the table.

    Raises:
        ValueError: If amount is negative.
    """
    if amount < 0:
        raise ValueError(f"Negative increment {amount} for {token}")
    table[token] += amount
    return table


def count_emoji(
    messages: Iterable[Message],
    table: Counter | None = None,
    fold_skin_tones: bool = False,
) -> Counter:
    """Merge the emoji increments of every message into a count table."""
    if table is None:
        table = Counter()
    for message in messages:
        for token, amount in extract(message, fold_skin_tones=fold_skin_tones):
            merge_increment(table, token, amount)
    return table


def rank_entries(table: Counter, top_n: int = DEFAULT_TOP_N) -> list[RankedEntry]:
    """Reduce a count table to its top N entries with dense competition ranks.

    Entries are ordered by descending count; equal counts keep the table's
    insertion order (first occurrence). Tied counts share a rank and the next
    distinct count skips by the size of the tie group: [10, 10, 7] -> [1, 1, 3].
    """
    ordered = sorted(table.items(), key=lambda item: item[1], reverse=True)[:top_n]

    entries: list[RankedEntry] = []
    for position, (token, count) in enumerate(ordered, start=1):
        if entries and entries[-1].count == count:
            rank = entries[-1].rank
        else:
            rank = position
        entries.append(RankedEntry(rank=rank, emoji=token, count=count))
    return entries


async def _count_channel(
    client: AsyncWebClient,
    channel_id: str,
    oldest: float,
    table: Counter,
    settings: Settings,
) -> None:
    """Fetch one channel's history (and optionally its threads) into the table.

    A broadcast reply whose thread parent predates the cutoff is counted from
    history, since that thread is never fetched.
    """
    history = await fetch_history(
        client, channel_id, oldest, max_pages=settings.max_history_pages
    )
    if not settings.include_thread_replies:
        count_emoji(history, table, fold_skin_tones=settings.fold_skin_tones)
        return

    fetched_threads = {
        message.thread_ts
        for message in history
        if message.reply_count and message.thread_ts and message.subtype != "thread_broadcast"
    }
    for message in history:
        # Broadcast replies are counted once, from the thread, when the thread is fetched
        if message.subtype == "thread_broadcast" and message.thread_ts in fetched_threads:
            continue
        count_emoji([message], table, fold_skin_tones=settings.fold_skin_tones)
        if message.reply_count and message.thread_ts:
            replies = await fetch_replies(
                client,
                channel_id,
                message.thread_ts,
                oldest,
                max_pages=settings.max_history_pages,
            )
            count_emoji(replies, table, fold_skin_tones=settings.fold_skin_tones)


async def aggregate(
    client: AsyncWebClient,
    settings: Settings,
    now: datetime | None = None,
) -> list[RankedEntry]:
    """Count emoji usage across every visible channel and return the ranked top N.

    Args:
        client: Slack client.
        settings: Ranking settings (window timezone, page cap, top N, options).
        now: Reference time for the one-month window; defaults to the current time.

    Returns:
        Up to ``settings.top_n`` ranked entries.
    """
    oldest = compute_cutoff(now, tz=settings.report_timezone)
    channel_ids = await list_channels(client)

    table: Counter = Counter()
    for channel_id in channel_ids:
        await _count_channel(client, channel_id, oldest, table, settings)

    logger.info(
        "Emoji usage aggregated",
        extra={
            "channels": len(channel_ids),
            "distinct_emoji": len(table),
            "oldest": oldest,
        },
    )
    return rank_entries(table, top_n=settings.top_n)

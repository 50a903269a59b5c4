"""Tests for cutoff computation, count accumulation, ranking, and aggregation."""

from collections import Counter
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from slack_sdk.errors import SlackApiError

from emoji_ranking.config import Settings
from emoji_ranking.models.slack import Message, Reaction
from emoji_ranking.ranking.aggregator import (
    aggregate,
    compute_cutoff,
    count_emoji,
    merge_increment,
    one_month_before,
    rank_entries,
)

NOW = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def _history_page(messages: list[dict]) -> dict:
    return {"ok": True, "messages": messages, "has_more": False}


def _make_client(channels: dict[str, list[dict]]) -> AsyncMock:
    """Build a Slack client mock serving one history page per channel."""
    client = AsyncMock()
    client.conversations_list.return_value = {
        "channels": [{"id": channel_id} for channel_id in channels],
    }

    async def history(channel, **kwargs):
        return _history_page(channels[channel])

    client.conversations_history.side_effect = history
    return client


# -- one_month_before / compute_cutoff --


def test_one_month_before_same_day():
    """The same day-of-month one month earlier."""
    assert one_month_before(NOW) == datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def test_one_month_before_crosses_year():
    """January goes back to December of the previous year."""
    moment = datetime(2025, 1, 15, tzinfo=timezone.utc)
    assert one_month_before(moment) == datetime(2024, 12, 15, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2024, 3, 31), datetime(2024, 2, 29)),
        (datetime(2023, 3, 31), datetime(2023, 2, 28)),
        (datetime(2024, 5, 31), datetime(2024, 4, 30)),
    ],
)
def test_one_month_before_clamps_missing_day(moment: datetime, expected: datetime):
    """A day that does not exist in the prior month clamps to its last day."""
    assert one_month_before(moment) == expected


def test_compute_cutoff_epoch_seconds():
    """compute_cutoff returns epoch seconds of the window start."""
    expected = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc).timestamp()
    assert compute_cutoff(NOW) == expected


def test_compute_cutoff_defaults_to_now():
    """Without a reference time the cutoff lies roughly one month in the past."""
    cutoff = compute_cutoff(tz="UTC")
    now = datetime.now(timezone.utc).timestamp()
    assert 27 * 86400 <= now - cutoff <= 32 * 86400


# -- merge_increment / count_emoji --


def test_merge_increment_accumulates(table: Counter):
    """Increments for the same token add up."""
    merge_increment(table, ":tada:", 1)
    result = merge_increment(table, ":tada:", 2)

    assert result is table
    assert table[":tada:"] == 3


def test_merge_increment_rejects_negative(table: Counter):
    """Negative increments raise ValueError."""
    with pytest.raises(ValueError):
        merge_increment(table, ":tada:", -1)


def test_count_emoji_over_messages():
    """count_emoji merges text and reaction increments of every message."""
    messages = [
        Message(text="hi :smile: :smile:"),
        Message(reactions=(Reaction(name="fire", count=5),)),
        Message(),
    ]

    table = count_emoji(messages)

    assert table == Counter({":smile:": 2, ":fire:": 5})


def test_count_emoji_extends_existing_table():
    """An existing table is extended in place."""
    table = Counter({":fire:": 1})

    count_emoji([Message(text=":fire:")], table)

    assert table[":fire:"] == 2


# -- rank_entries --


def test_rank_entries_dense_competition():
    """Counts [10,10,7,7,7,3] rank as [1,1,3,3,3,6]."""
    table = Counter({":a:": 10, ":b:": 10, ":c:": 7, ":d:": 7, ":e:": 7, ":f:": 3})

    entries = rank_entries(table)

    assert [e.count for e in entries] == [10, 10, 7, 7, 7, 3]
    assert [e.rank for e in entries] == [1, 1, 3, 3, 3, 6]


def test_rank_entries_descending_counts():
    """Entries are ordered by descending count regardless of insertion order."""
    table = Counter({":low:": 1, ":high:": 9, ":mid:": 5})

    entries = rank_entries(table)

    assert [e.emoji for e in entries] == [":high:", ":mid:", ":low:"]
    assert [e.rank for e in entries] == [1, 2, 3]


def test_rank_entries_ties_keep_first_seen_order():
    """Equal counts keep the order in which tokens were first counted."""
    table = Counter()
    for token in (":zebra:", ":apple:", ":mango:"):
        merge_increment(table, token, 2)

    entries = rank_entries(table)

    assert [e.emoji for e in entries] == [":zebra:", ":apple:", ":mango:"]
    assert {e.rank for e in entries} == {1}


@pytest.mark.parametrize("distinct", [0, 3, 10, 15])
def test_rank_entries_length_is_min_of_top_n(distinct: int):
    """The ranking has min(10, distinct tokens) entries."""
    table = Counter({f":e{i}:": i + 1 for i in range(distinct)})

    assert len(rank_entries(table)) == min(10, distinct)


def test_rank_entries_custom_top_n():
    """top_n limits the ranking length."""
    table = Counter({":a:": 3, ":b:": 2, ":c:": 1})

    assert [e.emoji for e in rank_entries(table, top_n=2)] == [":a:", ":b:"]


# -- aggregate --


async def test_aggregate_end_to_end(settings: Settings):
    """Text and reactions across two channels sum into one ranked token."""
    client = _make_client(
        {
            "CA": [{"text": "great :tada:", "reactions": [{"name": "tada", "count": 2}]}],
            "CB": [{"text": "", "reactions": [{"name": "tada", "count": 1}]}],
        }
    )

    entries = await aggregate(client, settings, now=NOW)

    assert [(e.rank, e.emoji, e.count) for e in entries] == [(1, ":tada:", 4)]


async def test_aggregate_fetches_channels_in_order_with_cutoff(settings: Settings):
    """Each channel is fetched once, in enumeration order, with the computed cutoff."""
    client = _make_client({"C2": [], "C1": [], "C3": []})

    await aggregate(client, settings, now=NOW)

    calls = client.conversations_history.call_args_list
    assert [c.kwargs["channel"] for c in calls] == ["C2", "C1", "C3"]
    expected_oldest = f"{compute_cutoff(NOW):.6f}"
    assert all(c.kwargs["oldest"] == expected_oldest for c in calls)
    client.conversations_list.assert_awaited_once()


async def test_aggregate_no_channels(settings: Settings):
    """No channels is not an error: the ranking is empty."""
    client = _make_client({})

    assert await aggregate(client, settings, now=NOW) == []
    client.conversations_history.assert_not_called()


async def test_aggregate_history_error_propagates(settings: Settings):
    """A Slack error while fetching any channel aborts the aggregation."""
    client = _make_client({"C1": [], "C2": []})
    client.conversations_history.side_effect = [
        _history_page([{"text": ":tada:"}]),
        SlackApiError(message="not_in_channel", response=MagicMock()),
    ]

    with pytest.raises(SlackApiError):
        await aggregate(client, settings, now=NOW)


async def test_aggregate_thread_replies_disabled_by_default(settings: Settings):
    """Thread replies are not fetched unless enabled."""
    client = _make_client(
        {"C1": [{"ts": "1.0", "thread_ts": "1.0", "reply_count": 3, "text": ":a:"}]}
    )

    await aggregate(client, settings, now=NOW)

    client.conversations_replies.assert_not_called()


async def test_aggregate_includes_thread_replies(settings: Settings):
    """With replies enabled, threads are counted and broadcasts are not double-counted."""
    settings = settings.model_copy(update={"include_thread_replies": True})
    client = _make_client(
        {
            "C1": [
                {"ts": "1.0", "thread_ts": "1.0", "reply_count": 2, "text": "parent :eyes:"},
                {"ts": "3.0", "thread_ts": "1.0", "subtype": "thread_broadcast", "text": ":fire:"},
            ]
        }
    )
    client.conversations_replies.return_value = {
        "messages": [
            {"ts": "1.0", "text": "parent :eyes:"},
            {"ts": "2.0", "text": "reply :fire:"},
            {"ts": "3.0", "text": ":fire:"},
        ],
        "has_more": False,
    }

    entries = await aggregate(client, settings, now=NOW)

    assert {e.emoji: e.count for e in entries} == {":eyes:": 1, ":fire:": 2}
    client.conversations_replies.assert_awaited_once()
    assert client.conversations_replies.call_args.kwargs["ts"] == "1.0"


async def test_aggregate_counts_broadcast_of_thread_older_than_cutoff(settings: Settings):
    """A broadcast whose thread parent is outside the window is counted from history."""
    settings = settings.model_copy(update={"include_thread_replies": True})
    client = _make_client(
        {
            "C1": [
                {"ts": "5.0", "thread_ts": "0.5", "subtype": "thread_broadcast", "text": ":fire:"},
            ]
        }
    )

    entries = await aggregate(client, settings, now=NOW)

    assert {e.emoji: e.count for e in entries} == {":fire:": 1}
    client.conversations_replies.assert_not_called()

"""Emoji extraction, aggregation, ranking, and report formatting."""

from emoji_ranking.ranking.aggregator import (
    aggregate,
    compute_cutoff,
    count_emoji,
    merge_increment,
    one_month_before,
    rank_entries,
)
from emoji_ranking.ranking.extractor import extract, to_token
from emoji_ranking.ranking.formatter import format_entry, format_report

__all__ = [
    "aggregate",
    "compute_cutoff",
    "count_emoji",
    "extract",
    "format_entry",
    "format_report",
    "merge_increment",
    "one_month_before",
    "rank_entries",
    "to_token",
]

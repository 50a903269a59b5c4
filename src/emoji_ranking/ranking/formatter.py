"""Ranking report text."""

from emoji_ranking.models.ranking import RankedEntry


def format_entry(entry: RankedEntry) -> str:
    """Render one ranking line, e.g. "第1位 :tada:: 4回"."""
    return f"第{entry.rank}位 {entry.emoji}: {entry.count}回"


def format_report(entries: list[RankedEntry]) -> str:
    """Render ranked entries one per line. An empty ranking renders as ""."""
    return "\n".join(format_entry(entry) for entry in entries)

"""Data models for the emoji ranking pipeline."""

from emoji_ranking.models.ranking import RankedEntry
from emoji_ranking.models.slack import Message, Reaction

__all__ = [
    "Message",
    "Reaction",
    "RankedEntry",
]

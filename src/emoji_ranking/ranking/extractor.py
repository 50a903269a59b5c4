"""Emoji occurrence extraction from a single message."""

import re

from emoji_ranking.models.slack import Message

EMOJI_PATTERN = re.compile(r":\w+:", re.ASCII)
SKIN_TONE_SEPARATOR = "::"


def to_token(name: str) -> str:
    """Return the canonical token for an emoji name, e.g. "tada" -> ":tada:"."""
    return f":{name}:"


def extract(message: Message, fold_skin_tones: bool = False) -> list[tuple[str, int]]:
    """Return (token, increment) pairs for every emoji used in a message.

    Inline ``:name:`` markers in the text each count once; every reaction counts
    its full user count. Text and reactions are not deduplicated against each
    other.

    Args:
        message: Message to scan.
        fold_skin_tones: Count "thumbsup::skin-tone-2" reactions as ":thumbsup:".
    """
    increments = [(match, 1) for match in EMOJI_PATTERN.findall(message.text or "")]
    for reaction in message.reactions:
        name = reaction.name
        if fold_skin_tones:
            name = name.split(SKIN_TONE_SEPARATOR, 1)[0]
        increments.append((to_token(name), reaction.count))
    return increments

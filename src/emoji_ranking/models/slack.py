"""Slack message and reaction models with lenient parsing of API payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _is_positive_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


class Reaction(BaseModel):
    """A named emoji attached to a message, with the number of users who applied it."""

    model_config = ConfigDict(frozen=True)

    name: str  # Emoji name without colons, e.g. "tada"
    count: int = Field(ge=1)


class Message(BaseModel):
    """A message from conversations.history or conversations.replies (no raw payload)."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    reactions: tuple[Reaction, ...] = ()
    ts: str | None = None  # Slack message ts, e.g. "1234567890.123456"
    subtype: str | None = None
    thread_ts: str | None = None
    reply_count: int = 0

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Message":
        """Build a Message from a raw Slack message dict.

        Missing fields are treated as absent. Reaction entries without a name
        or without a positive integer count are dropped.
        """
        reactions = tuple(
            Reaction(name=item["name"], count=item["count"])
            for item in raw.get("reactions") or []
            if item.get("name") and _is_positive_count(item.get("count"))
        )
        return cls(
            text=raw.get("text"),
            reactions=reactions,
            ts=raw.get("ts"),
            subtype=raw.get("subtype"),
            thread_ts=raw.get("thread_ts"),
            reply_count=raw.get("reply_count") or 0,
        )

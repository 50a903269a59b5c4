"""Ranked emoji entry model."""

from pydantic import BaseModel, ConfigDict, Field


class RankedEntry(BaseModel):
    """One line of the ranking: dense competition rank, emoji token, and total count."""

    model_config = ConfigDict(frozen=True)

    rank: int = Field(ge=1)
    emoji: str  # Canonical token, e.g. ":tada:"
    count: int = Field(ge=0)

"""Slack access: client, channel enumeration, history retrieval, and report posting."""

from emoji_ranking.slack.channels import list_channels
from emoji_ranking.slack.client import get_slack_client, reset_client
from emoji_ranking.slack.history import fetch_history, fetch_replies
from emoji_ranking.slack.publisher import post_report

__all__ = [
    "fetch_history",
    "fetch_replies",
    "get_slack_client",
    "list_channels",
    "post_report",
    "reset_client",
]

"""Async Slack client singleton.

Creates a cached AsyncWebClient instance configured with the bot token from
application settings. Callers that already hold a Settings object pass it in;
otherwise the cached settings are used. The cached client is replaced when the
requested token differs from the one it was built with.
"""

from slack_sdk.web.async_client import AsyncWebClient

from emoji_ranking.config import Settings, get_settings

_client: AsyncWebClient | None = None


async def get_slack_client(settings: Settings | None = None) -> AsyncWebClient:
    """Return a cached async Slack client instance.

    Creates the client on first call using slack_bot_token from settings.
    Subsequent calls with the same token return the cached instance.
    """
    global _client
    if settings is None:
        settings = get_settings()
    if _client is None or _client.token != settings.slack_bot_token:
        _client = AsyncWebClient(token=settings.slack_bot_token)
    return _client


def reset_client() -> None:
    """Reset the cached client instance. Used for testing."""
    global _client
    _client = None

"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Slack
    slack_bot_token: str = ""
    report_channel_id: str = ""

    # Scheduler
    scheduler_secret: str = ""

    # Ranking
    top_n: int = 10
    max_history_pages: int = 200
    report_timezone: str = "Asia/Tokyo"
    include_thread_replies: bool = False
    fold_skin_tones: bool = False
    empty_report_text: str = "集計期間中に使われた絵文字はありませんでした"

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()

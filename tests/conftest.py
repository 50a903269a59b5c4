"""Shared test fixtures."""

from collections import Counter

import pytest
from fastapi.testclient import TestClient

from emoji_ranking.app import app
from emoji_ranking.config import Settings


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def settings() -> Settings:
    """Settings with explicit values, independent of the environment and .env."""
    return Settings(
        _env_file=None,
        slack_bot_token="xoxb-test",
        report_channel_id="C_REPORT",
        scheduler_secret="test-secret",
        report_timezone="UTC",
    )


@pytest.fixture
def table() -> Counter:
    """An empty emoji count table."""
    return Counter()

"""Entry point for cron-style invocation: ``python -m emoji_ranking``.

Runs the ranking once. The exit status is non-zero if the run raises.
"""

import asyncio

from emoji_ranking.config import get_settings
from emoji_ranking.logging_config import configure_logging
from emoji_ranking.report import run_ranking_and_publish


def main() -> None:
    """Configure logging and run the monthly ranking once."""
    settings = get_settings()
    configure_logging(settings.log_level)
    asyncio.run(run_ranking_and_publish(settings))


if __name__ == "__main__":
    main()

"""Bounded cursor pagination over Slack Web API methods.

Slack list methods return ``has_more`` and ``response_metadata.next_cursor``.
Pages are produced lazily, one request at a time, and the loop is capped so a
server that never stops reporting ``has_more`` cannot keep the run alive forever.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000


def next_cursor(response: Any) -> str | None:
    """Return the continuation cursor of a response, or None when it has none."""
    metadata = response.get("response_metadata") or {}
    return metadata.get("next_cursor") or None


async def iter_pages(
    method: Callable[..., Awaitable[Any]],
    max_pages: int,
    **params: Any,
) -> AsyncIterator[Any]:
    """Yield every page returned by a cursor-paginated Slack method.

    The first request carries no cursor. Iteration stops after a page whose
    ``has_more`` is false (or missing).

    Args:
        method: Bound AsyncWebClient method, e.g. ``client.conversations_history``.
        max_pages: Maximum number of pages to request.
        **params: Keyword arguments forwarded on every request.

    Raises:
        RuntimeError: If more pages remain after ``max_pages`` requests, or the
            server reports more pages without a cursor to reach them.
    """
    cursor: str | None = None
    for page_number in range(1, max_pages + 1):
        kwargs = dict(params)
        if cursor:
            kwargs["cursor"] = cursor

        response = await method(**kwargs)
        yield response

        if not response.get("has_more"):
            return

        cursor = next_cursor(response)
        if cursor is None:
            raise RuntimeError(
                f"Pagination reported has_more without a next_cursor on page {page_number}"
            )

    logger.error(
        "Pagination cap reached",
        extra={"max_pages": max_pages, "params": {k: str(v) for k, v in params.items()}},
    )
    raise RuntimeError(f"Pagination did not finish within {max_pages} pages")

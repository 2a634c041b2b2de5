"""Page fetcher — page metadata plus a cursor-driven drain of its blocks."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from .errors import RetrievalError
from .types import Block, NotionAPI, Page

logger = logging.getLogger(__name__)


async def iter_block_children(api: NotionAPI, block_id: str) -> AsyncIterator[Block]:
    """Yield the direct children of *block_id* across every listing page.

    Requests are sequential: each one sends the ``next_cursor`` of the
    previous response, starting with no cursor. Iteration ends when the
    API returns a falsy cursor. Grandchildren are not requested.
    """
    cursor: str | None = None
    while True:
        response = await api.list_block_children(block_id, start_cursor=cursor)
        for block in response.get("results") or []:
            yield block
        cursor = response.get("next_cursor")
        if not cursor:
            return


class PageFetcher:
    """Retrieves one page and all of its top-level blocks."""

    def __init__(self, api: NotionAPI) -> None:
        self._api = api

    async def fetch(self, page_id: str) -> tuple[Page, list[Block]]:
        """Return ``(page, blocks)`` for *page_id*.

        Raises:
            RetrievalError: If the page or any block listing call fails.
        """
        try:
            page = await self._api.retrieve_page(page_id)
            blocks = [block async for block in iter_block_children(self._api, page_id)]
        except Exception as exc:
            raise RetrievalError(exc) from exc
        logger.debug("Fetched page %s with %d block(s)", page_id, len(blocks))
        return page, blocks

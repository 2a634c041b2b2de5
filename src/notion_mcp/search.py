"""Search adapter — one page-only search call with normalized properties."""

from __future__ import annotations

import logging

from .errors import SearchError
from .models import SearchResult
from .properties import normalize_properties
from .types import NotionAPI

logger = logging.getLogger(__name__)

# Databases and other object kinds are excluded by Notion, not here.
PAGE_FILTER = {"property": "object", "value": "page"}


class SearchAdapter:
    """Runs a Notion search restricted to pages.

    Only the first page of results is returned; ``next_cursor`` on the
    search response is ignored.
    """

    def __init__(self, api: NotionAPI) -> None:
        self._api = api

    async def search(self, query: str) -> list[SearchResult]:
        """Return the first page of results for *query*.

        Raises:
            SearchError: If the search call fails.
        """
        try:
            response = await self._api.search(query, filter=dict(PAGE_FILTER))
        except Exception as exc:
            raise SearchError(exc) from exc

        results = [
            SearchResult(
                id=page.get("id", ""),
                url=page.get("url"),
                created_time=page.get("created_time"),
                last_edited_time=page.get("last_edited_time"),
                properties=normalize_properties(page.get("properties")),
            )
            for page in response.get("results") or []
        ]
        logger.debug("Search %r returned %d page(s)", query, len(results))
        return results

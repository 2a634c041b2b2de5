"""Notion tools — search and page retrieval on a FastMCP sub-server.

Both tools return the payload as pretty-printed JSON text. A failure ends
the call with a ``ToolError``; no partial payload is ever returned.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..assembler import PageAssembler
from ..client import NotionClient
from ..errors import categorize_error, make_tool_error
from ..fetcher import PageFetcher
from ..models import PagePayload, SearchPayload
from ..search import SearchAdapter
from ..types import PageId, SearchQuery

logger = logging.getLogger(__name__)
notion_server = FastMCP("notion")


def _log_failure(label: str, exc: Exception) -> None:
    category, hint = categorize_error(exc)
    logger.error("%s: %s [%s] %s", label, exc, category.value, hint)


@notion_server.tool(
    description="Search for pages in Notion",
    annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
)
async def search_notion(query: SearchQuery) -> str:
    """Search pages in the workspace and return their normalized properties.

    Args:
        query: Free-text query passed to Notion search.

    Returns:
        JSON text ``{query, total_results, results}``.
    """
    logger.info("Searching Notion for: %s", query)
    try:
        results = await SearchAdapter(NotionClient.get()).search(query)
    except Exception as exc:
        _log_failure("Search error", exc)
        raise make_tool_error("Failed to search Notion", exc) from exc

    payload = SearchPayload(query=query, total_results=len(results), results=results)
    return payload.model_dump_json(indent=2)


@notion_server.tool(
    description="Get complete content and properties of a specific Notion page",
    annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True),
)
async def get_notion_page(page_id: PageId) -> str:
    """Fetch one page with its properties and rendered block content.

    Args:
        page_id: Notion page ID (dashed or undashed UUID).

    Returns:
        JSON text ``{page_id, url, properties, content, total_blocks}``.
    """
    logger.info("Getting page content for: %s", page_id)
    try:
        assembler = PageAssembler(PageFetcher(NotionClient.get()))
        bundle = await assembler.assemble(page_id)
    except Exception as exc:
        _log_failure("Get page error", exc)
        raise make_tool_error("Failed to get page", exc) from exc

    payload = PagePayload(
        page_id=page_id,
        url=bundle.url,
        properties=bundle.properties,
        content=bundle.content,
        total_blocks=bundle.total_blocks,
    )
    return payload.model_dump_json(indent=2)

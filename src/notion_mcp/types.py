"""Shared type aliases, kind literals, and the upstream API protocol."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Protocol

from pydantic import Field

# ── Kind literals ────────────────────────────────────────────────────────────

PropertyKind = Literal[
    "title", "rich_text", "number", "select", "multi_select", "date",
    "checkbox", "url", "email", "phone_number", "people", "relation",
]
BlockKind = Literal[
    "paragraph", "heading_1", "heading_2", "heading_3",
    "bulleted_list_item", "numbered_list_item", "to_do", "toggle",
    "code", "quote", "divider",
]

# Raw JSON objects as returned by the Notion API.
PropertyValue = dict[str, Any]
Block = dict[str, Any]
Page = dict[str, Any]

# ── Annotated aliases ────────────────────────────────────────────────────────

SearchQuery = Annotated[str, Field(description="Search query for Notion pages")]
PageId = Annotated[str, Field(description="The ID of the Notion page to retrieve")]


class NotionAPI(Protocol):
    """The three read calls the adapter needs from Notion.

    :class:`~notion_mcp.client.NotionClient` is the HTTP implementation;
    tests substitute an in-memory fake.
    """

    async def retrieve_page(self, page_id: str) -> Page: ...

    async def list_block_children(
        self, block_id: str, start_cursor: str | None = None
    ) -> dict[str, Any]: ...

    async def search(self, query: str, filter: dict[str, str] | None = None) -> dict[str, Any]: ...

"""Tests for fetcher.py — cursor pagination and error wrapping."""

from __future__ import annotations

import pytest

from tests.conftest import FakeNotionAPI, text_block
from notion_mcp.errors import NotionAPIError, RetrievalError
from notion_mcp.fetcher import PageFetcher, iter_block_children


def _listing(count: int, cursor: str | None, start: int = 0) -> dict:
    return {
        "object": "list",
        "results": [text_block("paragraph", f"b{start + i}") for i in range(count)],
        "next_cursor": cursor,
        "has_more": cursor is not None,
    }


class TestIterBlockChildren:
    @pytest.mark.asyncio
    async def test_single_page(self):
        api = FakeNotionAPI(listings=[_listing(3, None)])
        blocks = [b async for b in iter_block_children(api, "page-1")]
        assert len(blocks) == 3
        assert api.calls_to("list_block_children") == [("list_block_children", "page-1", None)]

    @pytest.mark.asyncio
    async def test_follows_cursors_in_order(self):
        """GIVEN N listing pages with cursors c1, c2, None
        WHEN draining THEN total length is the sum and exactly N calls are made.
        """
        api = FakeNotionAPI(
            listings=[_listing(2, "c1"), _listing(4, "c2", start=2), _listing(1, None, start=6)]
        )
        blocks = [b async for b in iter_block_children(api, "page-1")]

        assert len(blocks) == 7
        assert [c[2] for c in api.calls_to("list_block_children")] == [None, "c1", "c2"]
        texts = [b["paragraph"]["rich_text"][0]["plain_text"] for b in blocks]
        assert texts == [f"b{i}" for i in range(7)]

    @pytest.mark.asyncio
    async def test_empty_string_cursor_is_terminal(self):
        api = FakeNotionAPI(listings=[_listing(1, "")])
        blocks = [b async for b in iter_block_children(api, "page-1")]
        assert len(blocks) == 1
        assert len(api.calls_to("list_block_children")) == 1

    @pytest.mark.asyncio
    async def test_missing_results_key(self):
        api = FakeNotionAPI(listings=[{"next_cursor": None}])
        assert [b async for b in iter_block_children(api, "page-1")] == []


class TestPageFetcher:
    @pytest.mark.asyncio
    async def test_two_page_listing(self, sample_page):
        """Two-page listing (abc then null) with 3 and 2 blocks yields 5 blocks in 2 calls."""
        api = FakeNotionAPI(
            page=sample_page,
            listings=[_listing(3, "abc"), _listing(2, None, start=3)],
        )
        page, blocks = await PageFetcher(api).fetch("page-1")

        assert page is sample_page
        assert len(blocks) == 5
        assert len(api.calls_to("list_block_children")) == 2
        assert len(api.calls_to("retrieve_page")) == 1

    @pytest.mark.asyncio
    async def test_page_retrieved_before_blocks(self, sample_page):
        api = FakeNotionAPI(page=sample_page)
        await PageFetcher(api).fetch("page-1")
        assert [c[0] for c in api.calls] == ["retrieve_page", "list_block_children"]

    @pytest.mark.asyncio
    async def test_api_error_wrapped(self):
        api = FakeNotionAPI(
            error=NotionAPIError("Could not find page with ID: x.", status_code=404, code="object_not_found")
        )
        with pytest.raises(RetrievalError) as excinfo:
            await PageFetcher(api).fetch("x")
        assert str(excinfo.value) == "Failed to get page content: Could not find page with ID: x."

    @pytest.mark.asyncio
    async def test_error_mid_pagination_wrapped(self, sample_page):
        class FailingSecondPage(FakeNotionAPI):
            async def list_block_children(self, block_id, start_cursor=None):
                if start_cursor:
                    raise ConnectionError("connection reset")
                return await super().list_block_children(block_id, start_cursor)

        api = FailingSecondPage(page=sample_page, listings=[_listing(2, "next")])
        with pytest.raises(RetrievalError, match="Failed to get page content: connection reset"):
            await PageFetcher(api).fetch("page-1")

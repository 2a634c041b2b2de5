"""Shared test fixtures for notion-mcp."""

from __future__ import annotations

from typing import Any

import pytest


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


@pytest.fixture(autouse=True, scope="session")
def _unwrap_fastmcp_tools():
    """Make tool functions directly awaitable regardless of FastMCP version."""
    import notion_mcp.tools.notion as notion_tools

    for name in list(vars(notion_tools)):
        obj = getattr(notion_tools, name, None)
        if obj is not None and hasattr(obj, "fn") and not callable(obj):
            setattr(notion_tools, name, obj.fn)


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit the real Notion API with a real token."""
    monkeypatch.setenv("NOTION_API_KEY", "secret_test-key-not-real")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Keep the user's ~/.config/notion-mcp/.env and any .env in the checkout out of tests."""
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(
        "notion_mcp.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the config singleton and the shared client pool between tests."""
    from notion_mcp.client import NotionClient
    from notion_mcp.config import reset_config

    reset_config()
    NotionClient._clients.clear()
    yield
    reset_config()
    NotionClient._clients.clear()


class FakeNotionAPI:
    """In-memory stand-in for NotionClient that records every call.

    Args:
        page: Returned by ``retrieve_page``.
        listings: Block-children responses, served in order.
        search_response: Returned by ``search``.
        error: Raised by every call when set.
    """

    def __init__(
        self,
        *,
        page: dict | None = None,
        listings: list[dict] | None = None,
        search_response: dict | None = None,
        error: Exception | None = None,
    ) -> None:
        self.page = page or {}
        self.listings = list(listings or [{"results": [], "next_cursor": None}])
        self.search_response = search_response or {"results": []}
        self.error = error
        self.calls: list[tuple] = []

    async def retrieve_page(self, page_id: str) -> dict:
        self.calls.append(("retrieve_page", page_id))
        if self.error:
            raise self.error
        return self.page

    async def list_block_children(self, block_id: str, start_cursor: str | None = None) -> dict:
        self.calls.append(("list_block_children", block_id, start_cursor))
        if self.error:
            raise self.error
        return self.listings.pop(0)

    async def search(self, query: str, filter: dict | None = None) -> dict:
        self.calls.append(("search", query, filter))
        if self.error:
            raise self.error
        return self.search_response

    def calls_to(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


def rich_text(*texts: str) -> list[dict]:
    """Build a rich_text run list from plain strings."""
    return [{"type": "text", "plain_text": t, "text": {"content": t}} for t in texts]


def text_block(kind: str, *texts: str, **extra: Any) -> dict:
    """Build a text-bearing block of *kind*."""
    return {"object": "block", "type": kind, kind: {"rich_text": rich_text(*texts), **extra}}


@pytest.fixture()
def sample_page() -> dict:
    """A page object with one property of every supported kind."""
    return {
        "object": "page",
        "id": "59833787-2cf9-4fdf-8782-e53db20768a5",
        "url": "https://www.notion.so/Roadmap-598337872cf94fdf8782e53db20768a5",
        "created_time": "2024-03-01T09:00:00.000Z",
        "last_edited_time": "2024-03-02T10:30:00.000Z",
        "properties": {
            "Name": {"id": "title", "type": "title", "title": rich_text("Road", "map")},
            "Status": {"id": "a", "type": "select", "select": {"name": "In progress"}},
            "Tags": {
                "id": "b",
                "type": "multi_select",
                "multi_select": [{"name": "A"}, {"name": "B"}],
            },
            "Done": {"id": "c", "type": "checkbox", "checkbox": True},
            "Due": {"id": "d", "type": "date", "date": {"start": "2024-04-01", "end": None}},
            "Estimate": {"id": "e", "type": "number", "number": 8},
        },
    }


@pytest.fixture()
def fake_api_factory():
    """Return the FakeNotionAPI class for building per-test fakes."""
    return FakeNotionAPI

"""Async Notion REST client — the three read calls the tools need."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import get_config
from .errors import NotionAPIError

logger = logging.getLogger(__name__)


class NotionClient:
    """Read-only Notion API client backed by one pooled ``httpx.AsyncClient``.

    Instances hold no per-request state and are shared by concurrent tool
    calls. :meth:`get` keeps one instance per token for the process.
    """

    _clients: dict[str, NotionClient] = {}

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        notion_version: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("No Notion API key — set NOTION_API_KEY")
        cfg = get_config()
        self._http = httpx.AsyncClient(
            base_url=base_url or cfg.notion_base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Notion-Version": notion_version or cfg.notion_version,
                "Content-Type": "application/json",
            },
            # Upstream calls are not bounded here; the MCP host owns timeouts.
            timeout=None,
            transport=transport,
        )

    @classmethod
    def get(cls, api_key: str | None = None) -> NotionClient:
        """Return (or create) the shared client for *api_key*."""
        key = api_key or get_config().notion_api_key
        if not key:
            raise ValueError("No Notion API key — set NOTION_API_KEY or pass api_key explicitly")
        if key not in cls._clients:
            cls._clients[key] = cls(key)
            logger.info("Created Notion client (key …%s)", key[-4:])
        return cls._clients[key]

    @classmethod
    async def close_all(cls) -> int:
        """Shut down all shared clients. Returns count closed."""
        count = 0
        for client in list(cls._clients.values()):
            await client.aclose()
            count += 1
        cls._clients.clear()
        logger.info("Closed %d Notion client(s)", count)
        return count

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── API calls ────────────────────────────────────────────────────────────

    async def retrieve_page(self, page_id: str) -> dict[str, Any]:
        """``GET /pages/{page_id}`` — page metadata and properties."""
        return await self._request("GET", f"pages/{page_id}")

    async def list_block_children(
        self, block_id: str, start_cursor: str | None = None
    ) -> dict[str, Any]:
        """``GET /blocks/{block_id}/children`` — one page of child blocks.

        Returns the raw listing with ``results`` and ``next_cursor``.
        """
        params = {"start_cursor": start_cursor} if start_cursor else None
        return await self._request("GET", f"blocks/{block_id}/children", params=params)

    async def search(
        self, query: str, filter: dict[str, str] | None = None
    ) -> dict[str, Any]:
        """``POST /search`` — first page of results only."""
        body: dict[str, Any] = {"query": query}
        if filter:
            body["filter"] = filter
        return await self._request("POST", "search", json=body)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = await self._http.request(method, path, params=params, json=json)
        if response.is_error:
            raise self._api_error(response)
        return response.json()

    @staticmethod
    def _api_error(response: httpx.Response) -> NotionAPIError:
        """Build a NotionAPIError from an error response body.

        Notion error bodies look like
        ``{"object": "error", "status": 404, "code": "object_not_found", "message": "..."}``.
        """
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or response.text or f"HTTP {response.status_code}"
        return NotionAPIError(
            message,
            status_code=response.status_code,
            code=body.get("code", ""),
        )

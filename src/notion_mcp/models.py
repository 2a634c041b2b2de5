"""Result models — the flattened shapes handed back to tool callers."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_serializer


class _OmitsMissing(BaseModel):
    """Drops the keys named in ``omit_if_none`` from dumps when their value is None.

    Page metadata the API did not send is left out of the payload; property
    values are never dropped, a null select stays ``null``.
    """

    omit_if_none: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def _drop_missing(self, handler):
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None or k not in self.omit_if_none}


class PageContentBundle(BaseModel):
    """Everything retrieved for one page, built once per request."""

    model_config = ConfigDict(frozen=True)

    page: dict[str, Any] = Field(description="Raw page metadata from the API")
    properties: dict[str, Any] = Field(default_factory=dict)
    content: str = Field(default="", description="Rendered blocks joined by blank lines")
    blocks: tuple[dict[str, Any], ...] = Field(default=())

    @computed_field
    @property
    def total_blocks(self) -> int:
        return len(self.blocks)

    @property
    def url(self) -> str | None:
        return self.page.get("url")


class SearchResult(_OmitsMissing):
    """One page hit from search, with normalized properties."""

    model_config = ConfigDict(frozen=True)
    omit_if_none: ClassVar[frozenset[str]] = frozenset({"url", "created_time", "last_edited_time"})

    id: str
    url: str | None = None
    created_time: str | None = None
    last_edited_time: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)


# ── Tool payloads ────────────────────────────────────────────────────────────


class SearchPayload(BaseModel):
    """JSON body returned by ``search_notion``."""

    query: str
    total_results: int
    results: list[SearchResult]


class PagePayload(_OmitsMissing):
    """JSON body returned by ``get_notion_page``."""

    omit_if_none: ClassVar[frozenset[str]] = frozenset({"url"})

    page_id: str
    url: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    content: str = ""
    total_blocks: int = 0

"""Page assembler — fetch, normalize and render one page."""

from __future__ import annotations

from .blocks import render_content
from .fetcher import PageFetcher
from .models import PageContentBundle
from .properties import normalize_properties


class PageAssembler:
    """Builds a :class:`PageContentBundle` from a :class:`PageFetcher`.

    Adds no failure modes of its own; a ``RetrievalError`` from the
    fetcher propagates unchanged.
    """

    def __init__(self, fetcher: PageFetcher) -> None:
        self._fetcher = fetcher

    async def assemble(self, page_id: str) -> PageContentBundle:
        page, blocks = await self._fetcher.fetch(page_id)
        return PageContentBundle(
            page=page,
            properties=normalize_properties(page.get("properties")),
            content=render_content(blocks),
            blocks=tuple(blocks),
        )

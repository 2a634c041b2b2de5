"""Block renderer — linearizes Notion content blocks into markdown-like text.

Every block renders to exactly one string. Unsupported kinds render as a
visible ``[<kind>]`` placeholder rather than being dropped; only empty
strings are removed, and only when the page content is joined.

Nested children are not fetched, so a toggle or list item renders its own
text only.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .properties import plain_text
from .types import Block, BlockKind

CHECKED = "✓"
UNCHECKED = "○"
DIVIDER = "---"
CODE_FENCE = "```"
BLOCK_SEPARATOR = "\n\n"

# Literal line prefixes for text-bearing kinds.
_PREFIXES: dict[BlockKind, str] = {
    "paragraph": "",
    "heading_1": "# ",
    "heading_2": "## ",
    "heading_3": "### ",
    "bulleted_list_item": "• ",
    "numbered_list_item": "1. ",
    "toggle": "▸ ",
    "quote": "> ",
}


def block_text(block: Block) -> str:
    """Return the joined rich text of *block*, or ``""`` if it has none."""
    payload = block.get(block.get("type")) or {}
    return plain_text(payload.get("rich_text"))


def _render_to_do(block: Block) -> str:
    payload = block.get("to_do") or {}
    mark = CHECKED if payload.get("checked") else UNCHECKED
    return f"{mark} {block_text(block)}"


def _render_code(block: Block) -> str:
    language = (block.get("code") or {}).get("language") or ""
    return f"{CODE_FENCE}{language}\n{block_text(block)}\n{CODE_FENCE}"


def _render_divider(block: Block) -> str:
    return DIVIDER


def _prefixed(prefix: str) -> Callable[[Block], str]:
    def render(block: Block) -> str:
        return f"{prefix}{block_text(block)}"

    return render


_RENDERERS: dict[BlockKind, Callable[[Block], str]] = {
    **{kind: _prefixed(prefix) for kind, prefix in _PREFIXES.items()},
    "to_do": _render_to_do,
    "code": _render_code,
    "divider": _render_divider,
}


def render_block(block: Block) -> str:
    """Render one block to a single line of text.

    Returns ``""`` for a text block with no runs and ``"[<kind>]"`` for a
    kind with no textual form.
    """
    kind = block.get("type")
    renderer = _RENDERERS.get(kind)
    if renderer is None:
        return f"[{kind}]"
    return renderer(block)


def render_blocks(blocks: Iterable[Block]) -> list[str]:
    """Render every block, one string per input block (empties included)."""
    return [render_block(block) for block in blocks]


def render_content(blocks: Iterable[Block]) -> str:
    """Render *blocks* and join the non-empty lines with a blank line between."""
    return BLOCK_SEPARATOR.join(line for line in render_blocks(blocks) if line)

"""Main FastMCP server — mounts the Notion tools."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import __version__
from .client import NotionClient
from .config import get_config
from .tools.notion import notion_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook — builds the shared Notion client, closes it on exit."""
    NotionClient.get()
    logger.info("Notion MCP server running!")
    yield {}
    closed = await NotionClient.close_all()
    logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "notion-mcp-server",
    version=__version__,
    instructions=(
        "Read-only access to a Notion workspace. Use search_notion to find "
        "pages, then get_notion_page with a result id for its properties "
        "and text content."
    ),
    lifespan=_lifespan,
)

app.mount(notion_server)


def _configure_logging(level: str) -> None:
    """Send log lines to stderr; stdout carries the MCP stdio stream."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def main() -> None:
    """Entry-point for ``notion-mcp`` console script."""
    cfg = get_config()
    _configure_logging(cfg.log_level)
    try:
        app.run()
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()

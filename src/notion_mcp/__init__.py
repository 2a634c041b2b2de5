"""Notion MCP server — Notion pages as flat properties plus markdown-like text."""

__version__ = "1.0.0"

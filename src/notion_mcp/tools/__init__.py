"""FastMCP sub-servers exposing the Notion tools."""

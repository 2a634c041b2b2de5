"""Server configuration via environment variables."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_NOTION_BASE_URL = "https://api.notion.com/v1"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    notion_api_key: str = Field(default="", description="Notion integration token")
    notion_version: str = Field(default=DEFAULT_NOTION_VERSION)
    notion_base_url: str = Field(default=DEFAULT_NOTION_BASE_URL)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in VALID_LOG_LEVELS:
            allowed = ", ".join(sorted(VALID_LOG_LEVELS))
            raise ValueError(f"Invalid log level '{value}'. Allowed: {allowed}")
        return level

    @field_validator("notion_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/") or DEFAULT_NOTION_BASE_URL

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        return cls(
            notion_api_key=os.getenv("NOTION_API_KEY", ""),
            notion_version=os.getenv("NOTION_VERSION", DEFAULT_NOTION_VERSION),
            notion_base_url=os.getenv("NOTION_BASE_URL", DEFAULT_NOTION_BASE_URL),
            log_level=os.getenv("NOTION_MCP_LOG_LEVEL", "INFO"),
        )


_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    Merges ``./.env`` and then ``~/.config/notion-mcp/.env`` into the
    environment first.
    Variables already set in the process environment win.
    """
    global _config
    if _config is None:
        from .dotenv import load_dotenv

        injected = load_dotenv()
        if injected:
            logging.getLogger(__name__).info(
                "Loaded %d var(s) from config: %s",
                len(injected),
                ", ".join(sorted(injected)),
            )
        _config = ServerConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset the config singleton (for testing)."""
    global _config
    _config = None

"""Merge ``.env`` files into the process environment.

Two files are read, in order: ``.env`` in the working directory, then
``~/.config/notion-mcp/.env``. MCP hosts often launch the server from an
arbitrary directory, so the per-user file catches a token the host did not
pass through. Only ``KEY=VALUE`` lines are understood.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_ENV_PATH = Path.home() / ".config" / "notion-mcp" / ".env"
LOCAL_ENV_NAME = ".env"

_QUOTES = ('"', "'")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def _needs_value(key: str, current: str | None) -> bool:
    """True when *current* is missing, blank, or an unexpanded ``$KEY`` placeholder.

    Some hosts forward ``NOTION_API_KEY="${NOTION_API_KEY}"`` verbatim when
    the variable is not defined in the user's shell.
    """
    if current is None:
        return True
    value = _unquote(current.strip()).strip()
    if not value:
        return True
    if value in (f"${key}", f"${{{key}}}"):
        return True
    return value.startswith(f"${{{key}:-") and value.endswith("}")


def parse_dotenv(path: Path) -> dict[str, str]:
    """Read ``KEY=VALUE`` pairs from *path*.

    Blank lines, ``#`` comments and an optional ``export`` prefix are
    tolerated. Values may be single- or double-quoted; nothing is expanded.
    A missing file yields an empty dict.
    """
    pairs: dict[str, str] = {}
    if not path.is_file():
        return pairs

    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        pairs[key] = _unquote(value.strip())
    return pairs


def default_env_paths() -> list[Path]:
    """Files merged by :func:`load_dotenv` when no path is given, first wins."""
    return [Path.cwd() / LOCAL_ENV_NAME, DEFAULT_ENV_PATH]


def load_dotenv(path: Path | None = None) -> dict[str, str]:
    """Copy entries into ``os.environ`` where no usable value exists.

    Args:
        path: ``.env`` file to read. Defaults to every file in
            :func:`default_env_paths`; a key set by an earlier file is kept.

    Returns:
        The entries that were written to the environment.
    """
    injected: dict[str, str] = {}
    for env_path in [path] if path else default_env_paths():
        for key, value in parse_dotenv(env_path).items():
            if _needs_value(key, os.environ.get(key)):
                os.environ[key] = value
                injected[key] = value
    return injected

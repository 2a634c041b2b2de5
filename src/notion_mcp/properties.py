"""Property normalizer — reduces Notion's tagged property values to plain JSON.

Each property carries its own ``type`` tag and keeps the payload under the
key of the same name::

    {"type": "select", "select": {"name": "Done", ...}}  ->  "Done"

Kinds without an entry in :data:`_NORMALIZERS` pass through unchanged so
newer Notion property types still reach the client.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .types import PropertyKind, PropertyValue


def _entries(items: Any) -> list[dict]:
    """Dict entries of a list payload; nulls and other junk are skipped."""
    return [item for item in items or [] if isinstance(item, dict)]


def plain_text(runs: list[dict] | None) -> str:
    """Concatenate the ``plain_text`` of each rich-text run, in order."""
    return "".join(run.get("plain_text") or "" for run in _entries(runs))


def _payload(prop: PropertyValue) -> Any:
    return prop.get(prop.get("type"))


def _text(prop: PropertyValue) -> str:
    return plain_text(_payload(prop))


def _raw(prop: PropertyValue) -> Any:
    return _payload(prop)


def _select(prop: PropertyValue) -> str | None:
    option = _payload(prop) or {}
    return option.get("name") or None


def _multi_select(prop: PropertyValue) -> list[str]:
    return [option.get("name") for option in _entries(_payload(prop))]


def _date(prop: PropertyValue) -> str | None:
    value = _payload(prop) or {}
    return value.get("start") or None


def _people(prop: PropertyValue) -> list[str]:
    return [person.get("name") or person.get("id") for person in _entries(_payload(prop))]


def _relation(prop: PropertyValue) -> list[str]:
    return [ref.get("id") for ref in _entries(_payload(prop))]


_NORMALIZERS: dict[PropertyKind, Callable[[PropertyValue], Any]] = {
    "title": _text,
    "rich_text": _text,
    "number": _raw,
    "select": _select,
    "multi_select": _multi_select,
    "date": _date,
    "checkbox": _raw,
    "url": _raw,
    "email": _raw,
    "phone_number": _raw,
    "people": _people,
    "relation": _relation,
}


def normalize_property(prop: PropertyValue) -> Any:
    """Reduce one property value to a string, number, bool, None, or list.

    Unknown kinds are returned as-is. Missing payloads degrade to ``""``,
    ``None`` or ``[]`` depending on the kind; this never raises.
    """
    normalizer = _NORMALIZERS.get(prop.get("type"))
    if normalizer is None:
        return prop
    return normalizer(prop)


def normalize_properties(properties: Mapping[str, PropertyValue] | None) -> dict[str, Any]:
    """Normalize a page's property map, keeping every key."""
    return {key: normalize_property(value) for key, value in (properties or {}).items()}

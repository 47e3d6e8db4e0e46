"""
JSON source strategy.

Every JSON value becomes an element: objects and arrays are branches, scalars
are leaves. Object members carry their key as the `key` attribute, scalars
their text as `value`.
"""

from __future__ import annotations

import json
from typing import Any

from .base import Element, SourceStrategy, registry


def _tag_for(value: Any) -> str:
    if isinstance(value, dict):
        return "OBJECT"
    if isinstance(value, list):
        return "ARRAY"
    if isinstance(value, bool):
        return "BOOLEAN"
    if value is None:
        return "NULL"
    if isinstance(value, (int, float)):
        return "NUMBER"
    return "STRING"


def _scalar_text(value: Any) -> str:
    # json spelling for true/false/null
    if isinstance(value, str):
        return value
    return json.dumps(value)


def value_to_element(value: Any, key: str | None = None) -> Element:
    root = Element(_tag_for(value))
    pending = [(root, value, key)]
    while pending:
        element, value, key = pending.pop()
        if key is not None:
            element.set_attribute("key", key)

        if isinstance(value, dict):
            members = [(str(k), v) for k, v in value.items()]
        elif isinstance(value, list):
            members = [(str(i), item) for i, item in enumerate(value)]
        else:
            element.set_attribute("value", _scalar_text(value))
            continue

        for member_key, member in members:
            child = element.add_child(Element(_tag_for(member)))
            pending.append((child, member, member_key))

    return root


class JSONStrategy(SourceStrategy):
    """JSON document handler."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def extensions(self) -> list[str]:
        return [".json"]

    def detect(self, content: str) -> bool:
        stripped = content.strip()
        if not stripped or stripped[0] not in "{[":
            return False
        try:
            json.loads(stripped)
        except (ValueError, RecursionError):
            return False
        return True

    def parse(self, content: str) -> Element:
        """Parse JSON into a tree of elements."""
        try:
            value = json.loads(content)
        except RecursionError:
            raise ValueError("JSON document is nested too deeply to decode") from None
        return value_to_element(value)


registry.register(JSONStrategy())

"""Utility functions for the contractdiff engine."""

from __future__ import annotations

import json
from typing import Any


def get_type_name(value: Any) -> str:
    """Get a friendly type name for a value."""
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, int):
        return "integer"
    elif isinstance(value, float):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, list):
        return "array"
    elif isinstance(value, dict):
        return "object"
    else:
        return type(value).__name__


def to_pretty_json(value: Any) -> str:
    """Serialize a JSON value for display."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=repr)


def indent(text: str, level: int) -> str:
    """Indent every line of ``text`` by ``level`` spaces."""
    prefix = " " * level
    return "\n".join(prefix + line for line in text.splitlines())


def get_json_depth(data: Any, limit: int) -> int:
    """
    Measure the nesting depth of a JSON value, stopping once ``limit`` is passed.

    Scalars have depth 0, ``[]`` and ``{}`` have depth 1. Uses an explicit
    stack so adversarially deep input cannot exhaust the interpreter stack.
    """
    deepest = 0
    stack = [(data, 0)]

    while stack:
        value, depth = stack.pop()
        if isinstance(value, dict):
            children = value.values()
        elif isinstance(value, list):
            children = value
        else:
            continue

        depth += 1
        deepest = max(deepest, depth)
        if deepest > limit:
            return deepest

        stack.extend((child, depth) for child in children)

    return deepest

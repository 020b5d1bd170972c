"""Value lookup in JSON documents by Address."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Union

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathParserError

from .address import Address, Field, Index, parse_address
from .exceptions import AddressSyntaxError, CaptureError
from .models import MISSING


PathLike = Union[Address, str]


def _as_address(path: PathLike) -> Address:
    return path if isinstance(path, Address) else parse_address(path)


@lru_cache(maxsize=1024)
def _compile(text: str):
    try:
        return jsonpath_parse(text)
    except JsonPathParserError as e:
        raise AddressSyntaxError(text, str(e)) from e


def _children(value: Any):
    if isinstance(value, dict):
        return value.values()
    if isinstance(value, (list, tuple)):
        return value
    return ()


def _in_document(match) -> bool:
    """
    Check that every datum on a match's context chain is a member of its parent.

    jsonpath-ng slices a non-array value by wrapping it in a one-element
    list, so ``$.a[*]`` over ``{"a": 5}`` yields ``5``. The wrapper never
    appears among its parent's members, which rejects such matches.
    """
    datum = match
    while datum.context is not None:
        if not any(child is datum.value for child in _children(datum.context.value)):
            return False
        datum = datum.context
    return True


class JSONPathMatcher:
    """Finds every value covered by a pattern Address."""

    @classmethod
    def compile(cls, path: PathLike):
        """Compile the JSONPath expression of an Address (cached)."""
        return _compile(_as_address(path).to_jsonpath())

    @classmethod
    def find_values(cls, data: Any, path: PathLike) -> list[Any]:
        """Find all values matching a pattern, in document order."""
        expr = cls.compile(path)
        return [m.value for m in expr.find(data) if _in_document(m)]


def find_values(data: Any, path: PathLike) -> list[Any]:
    return JSONPathMatcher.find_values(data, path)


def capture_value(path: PathLike, data: Any, default: Any = None) -> Any:
    """
    Read the single value at a concrete Address.

    Only field and index steps can be followed. The root, wildcard and
    range steps, and steps that do not exist in ``data`` give ``default``.
    """
    address = _as_address(path)
    if address.is_root:
        return default

    current = data
    for step in address:
        if isinstance(step, Field):
            if not isinstance(current, dict) or step.name not in current:
                return default
            current = current[step.name]
        elif isinstance(step, Index):
            if not isinstance(current, list) or step.index >= len(current):
                return default
            current = current[step.index]
        else:
            return default

    return current


def capture_variables(data: Any, templates: Mapping[str, PathLike]) -> dict[str, Any]:
    """
    Capture named values from a document.

    Args:
        data: The document to read from
        templates: Variable name to Address (or path expression)

    Returns:
        Variable name to captured value

    Raises:
        CaptureError: if any template is not found in ``data``
    """
    captured = {}
    for name, path in templates.items():
        address = _as_address(path)
        value = capture_value(address, data, default=MISSING)
        if value is MISSING:
            raise CaptureError(name, address.to_jsonpath())
        captured[name] = value
    return captured

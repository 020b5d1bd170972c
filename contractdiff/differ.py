"""Recursive structural diff of two JSON documents."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from .address import Address, Field, Index
from .models import (
    MISSING,
    CompareConfig,
    CompareMode,
    Difference,
    JsonKind,
    NumericMode,
)
from .utils import get_type_name

logger = logging.getLogger(__name__)


def json_kind(value: Any) -> JsonKind:
    """Classify a decoded JSON value."""
    if value is None:
        return JsonKind.NULL
    if isinstance(value, bool):
        return JsonKind.BOOL
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Unsupported JSON value type: {get_type_name(value)}")


def _as_float(value: Any) -> Any:
    try:
        return float(value)
    except OverflowError:
        return value


class Differ:
    """
    Walks an actual and an expected document in lock-step.

    The walk is a lazy generator of Differences that have already been
    checked against the ignore-paths, which gives two result modes:
    ``diff`` drains it and returns every Difference, ``has_difference``
    stops at the first one.

    Iteration over members is driven by the expected side in inclusive
    mode (members only present in actual are never reported) and by the
    union of both sides in strict mode.

    A member present on one side only is reported at its own address
    (parent plus key or index), not at the parent. An ignore-path naming
    the member, such as ``$.id``, therefore also suppresses its absence;
    tools that report absences at the parent need the parent ignored instead.

    Arrays registered as ignore-order are matched greedily: every expected
    element takes the first not yet matched actual element that produces
    no difference against it. There is no backtracking, so on ambiguous
    input an early element can claim an actual element that a later one
    needed, and the array is reported as different although a perfect
    pairing exists.
    """

    def __init__(self, config: Optional[CompareConfig] = None):
        self.config = config or CompareConfig()

    def diff(self, actual: Any, expected: Any, path: Address = Address()) -> list[Difference]:
        """Return every difference between ``actual`` and ``expected``."""
        return list(self._walk(actual, expected, path))

    def has_difference(self, actual: Any, expected: Any, path: Address = Address()) -> bool:
        """Check whether at least one difference exists, without collecting them."""
        return next(self._walk(actual, expected, path), None) is not None

    def _walk(self, actual: Any, expected: Any, path: Address) -> Iterator[Difference]:
        kind = json_kind(expected)

        if kind == JsonKind.ARRAY:
            if self.config.to_ignore_order(path):
                yield from self._walk_unordered(actual, expected, path)
            else:
                yield from self._walk_array(actual, expected, path)
        elif kind == JsonKind.OBJECT:
            yield from self._walk_object(actual, expected, path)
        elif kind == JsonKind.NUMBER:
            if not self._numbers_equal(actual, expected):
                yield from self._record(path, actual, expected)
        elif json_kind(actual) != kind or actual != expected:
            yield from self._record(path, actual, expected)

    def _numbers_equal(self, actual: Any, expected: Any) -> bool:
        if json_kind(actual) != JsonKind.NUMBER:
            return False
        if self.config.numeric_mode == NumericMode.ASSUME_FLOAT:
            return _as_float(actual) == _as_float(expected)
        return type(actual) is type(expected) and actual == expected

    def _walk_array(self, actual: Any, expected: list, path: Address) -> Iterator[Difference]:
        if json_kind(actual) != JsonKind.ARRAY:
            yield from self._record(path, actual, expected)
            return

        if self.config.compare_mode == CompareMode.INCLUSIVE:
            indexes = range(len(expected))
        else:
            indexes = range(max(len(actual), len(expected)))

        for i in indexes:
            child = path.append(Index(i))
            in_actual = i < len(actual)
            in_expected = i < len(expected)

            if in_actual and in_expected:
                yield from self._walk(actual[i], expected[i], child)
            elif in_expected:
                yield from self._record(child, MISSING, expected[i])
            else:
                yield from self._record(child, actual[i], MISSING)

    def _walk_unordered(self, actual: Any, expected: list, path: Address) -> Iterator[Difference]:
        if json_kind(actual) != JsonKind.ARRAY:
            yield from self._record(path, actual, expected)
            return

        strict = self.config.compare_mode == CompareMode.STRICT
        if len(expected) > len(actual) or (strict and len(expected) != len(actual)):
            logger.debug(
                "Unordered array length mismatch at %s: actual %d, expected %d",
                path, len(actual), len(expected)
            )
            yield from self._record(path, actual, expected)

        matched: set[int] = set()

        for i, expected_item in enumerate(expected):
            child = path.append(Index(i))
            found = False

            for j, actual_item in enumerate(actual):
                if j in matched:
                    continue
                if not self.has_difference(actual_item, expected_item, child):
                    matched.add(j)
                    found = True
                    break

            if not found:
                logger.debug("No unordered match for expected element %s", child)
                yield from self._record(path, actual, expected)

        if len(matched) != len(actual):
            yield from self._record(path, actual, expected)

    def _walk_object(self, actual: Any, expected: dict, path: Address) -> Iterator[Difference]:
        if json_kind(actual) != JsonKind.OBJECT:
            yield from self._record(path, actual, expected)
            return

        keys = list(expected)
        if self.config.compare_mode == CompareMode.STRICT:
            keys.extend(key for key in actual if key not in expected)

        for key in keys:
            child = path.append(Field(key))

            if key in actual and key in expected:
                yield from self._walk(actual[key], expected[key], child)
            elif key in expected:
                yield from self._record(child, MISSING, expected[key])
            else:
                yield from self._record(child, actual[key], MISSING)

    def _record(self, path: Address, actual: Any, expected: Any) -> Iterator[Difference]:
        """Emit a Difference unless an ignore-path covers ``path``."""
        if self.config.to_ignore(path):
            logger.debug("Ignoring difference at %s", path)
            return

        yield Difference(
            path=path,
            actual=actual,
            expected=expected,
            compare_mode=self.config.compare_mode,
        )


def diff(actual: Any, expected: Any, config: Optional[CompareConfig] = None) -> list[Difference]:
    """
    Compare two JSON documents.

    Args:
        actual: The document produced by the system under test
        expected: The document it is checked against
        config: Comparison policy (strict comparison by default)

    Returns:
        List of differences, empty when the documents match
    """
    return Differ(config).diff(actual, expected)


def has_difference(actual: Any, expected: Any, config: Optional[CompareConfig] = None) -> bool:
    """Check whether two JSON documents differ under ``config``."""
    return Differ(config).has_difference(actual, expected)

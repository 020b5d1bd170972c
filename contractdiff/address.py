"""
Addresses inside JSON documents.

An Address is either the root of a document or an ordered sequence of
steps leading from the root to a node. Addresses are produced by the diff
walk (concrete ``Field``/``Index`` steps) and parsed from path expressions
such as ``$.users[*].id`` (which may also contain wildcard and range steps
and act as patterns).

Path syntax:
    $               root
    .name           object field, name matches [a-zA-Z_][a-zA-Z0-9_]*
    .*              any object field
    [3]             array index
    [*] or [:]      any array index
    [1:4]           indices 1 <= i < 4
    [2:]            indices i >= 2
    [:5]            indices i < 5
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator, Union

from .exceptions import AddressSyntaxError


_NAME = r"[a-zA-Z_][a-zA-Z0-9_]*"
_SEGMENT = rf"(?:\.(?:{_NAME}|\*)|\[(?:\d+|\*|\d*:\d*)\])"
_GRAMMAR = re.compile(rf"\$(?:{_SEGMENT})*", re.ASCII)
_TOKEN_SPLIT = re.compile(r"[.\[]")


@dataclass(frozen=True)
class Field:
    """Exact object field name."""
    name: str

    def __str__(self) -> str:
        return f".{self.name}"


@dataclass(frozen=True)
class Index:
    """Exact array position."""
    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True)
class IndexRange:
    """Array positions ``start <= i < end``."""
    start: int
    end: int

    def __str__(self) -> str:
        return f"[{self.start}:{self.end}]"


@dataclass(frozen=True)
class IndexRangeFrom:
    """Array positions ``i >= start``."""
    start: int

    def __str__(self) -> str:
        return f"[{self.start}:]"


@dataclass(frozen=True)
class IndexRangeTo:
    """Array positions ``i < end``."""
    end: int

    def __str__(self) -> str:
        return f"[:{self.end}]"


@dataclass(frozen=True)
class WildcardIndex:
    """Any array position."""

    def __str__(self) -> str:
        return "[*]"


@dataclass(frozen=True)
class WildcardField:
    """Any object field."""

    def __str__(self) -> str:
        return ".*"


Step = Union[Field, Index, IndexRange, IndexRangeFrom, IndexRangeTo, WildcardIndex, WildcardField]


def step_matches(pattern: Step, subject: Step) -> bool:
    """
    Check whether a single pattern step covers a subject step.

    Identical steps always match. Otherwise only the asymmetric
    wildcard/range rules apply, with the pattern on the left.
    """
    if pattern == subject:
        return True

    if isinstance(pattern, WildcardField):
        return isinstance(subject, Field)

    if not isinstance(subject, Index):
        return False

    if isinstance(pattern, WildcardIndex):
        return True
    if isinstance(pattern, IndexRange):
        return pattern.start <= subject.index < pattern.end
    if isinstance(pattern, IndexRangeFrom):
        return pattern.start <= subject.index
    if isinstance(pattern, IndexRangeTo):
        return subject.index < pattern.end

    return False


@dataclass(frozen=True)
class Address:
    """Location inside a JSON document. An empty step sequence is the root."""
    steps: tuple[Step, ...] = ()

    ROOT_LABEL = "(root)"

    @classmethod
    def root(cls) -> Address:
        return cls()

    @classmethod
    def of(cls, *steps: Step) -> Address:
        return cls(tuple(steps))

    @classmethod
    def parse(cls, text: str) -> Address:
        return parse_address(text)

    @property
    def is_root(self) -> bool:
        return not self.steps

    def append(self, step: Step) -> Address:
        """Return a new Address one step deeper."""
        return Address(self.steps + (step,))

    def prefixes(self, subject: Address) -> bool:
        """
        Check whether this Address, used as a pattern, covers ``subject``.

        The root covers everything. A non-root pattern covers a subject
        when it is not longer than the subject and every pattern step
        matches the subject step at the same position; the subject may
        continue below the pattern.
        """
        if len(self.steps) > len(subject.steps):
            return False

        return all(
            step_matches(pattern, step)
            for pattern, step in zip(self.steps, subject.steps)
        )

    def matches(self, subject: Address) -> bool:
        """Check whether this pattern covers exactly ``subject`` (same depth)."""
        return len(self.steps) == len(subject.steps) and self.prefixes(subject)

    def to_jsonpath(self) -> str:
        """Textual form accepted by ``parse_address``."""
        return "$" + "".join(str(step) for step in self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __str__(self) -> str:
        if self.is_root:
            return self.ROOT_LABEL
        return "".join(str(step) for step in self.steps)


def prefixes(pattern: Address, subject: Address) -> bool:
    """Module-level form of ``Address.prefixes``."""
    return pattern.prefixes(subject)


def is_valid_address(text: str) -> bool:
    """Check a path expression against the grammar without interpreting it."""
    return isinstance(text, str) and _GRAMMAR.fullmatch(text) is not None


def parse_address(text: str) -> Address:
    """
    Parse a path expression into an Address.

    The whole expression is validated against the grammar before any
    segment is interpreted.

    Raises:
        AddressSyntaxError: if ``text`` is not a valid path expression
    """
    if not isinstance(text, str):
        raise AddressSyntaxError(repr(text), f"expected a string, got {type(text).__name__}")
    return _parse_cached(text)


@lru_cache(maxsize=1024)
def _parse_cached(text: str) -> Address:
    if not text:
        raise AddressSyntaxError(text, "empty path expression")
    if not text.startswith("$"):
        raise AddressSyntaxError(text, "path must start with '$'")
    if not is_valid_address(text):
        raise AddressSyntaxError(text)

    if text == "$":
        return Address.root()

    tokens = _TOKEN_SPLIT.split(text[1:])
    # The first token is always the empty text before the first separator
    return Address(tuple(_parse_token(token) for token in tokens[1:]))


def _parse_token(token: str) -> Step:
    """Classify a single segment of a validated path expression."""
    from_array = token.endswith("]")
    if from_array:
        token = token[:-1]

    if token in ("*", ":"):
        return WildcardIndex() if from_array else WildcardField()

    if from_array:
        if token.endswith(":"):
            return IndexRangeFrom(int(token[:-1]))
        if token.startswith(":"):
            return IndexRangeTo(int(token[1:]))
        if ":" in token:
            start, end = token.split(":", 1)
            return IndexRange(int(start), int(end))

    if token.isdigit():
        return Index(int(token))

    return Field(token)

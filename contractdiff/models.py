"""Data models for the contractdiff engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Optional, Union

from .address import Address, parse_address
from .utils import indent, to_pretty_json


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class CompareMode(Enum):
    """How much of the actual document has to agree with the expected one."""
    # Every expected member must be present in actual; actual may carry more
    INCLUSIVE = "inclusive"
    # Both documents must agree on every member
    STRICT = "strict"


class NumericMode(Enum):
    STRICT = "strict"
    ASSUME_FLOAT = "assume_float"


class JsonKind(Enum):
    NULL = "null"
    BOOL = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class _Missing:
    """Marker for a member absent from one side of a comparison."""

    _instance: Optional[_Missing] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<missing>"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

PathLike = Union[Address, str]


def _to_addresses(paths: Iterable[PathLike]) -> tuple[Address, ...]:
    return tuple(
        p if isinstance(p, Address) else parse_address(p)
        for p in paths
    )


@dataclass(frozen=True)
class CompareConfig:
    """
    Comparison policy for one diff call.

    Path patterns may be given as Address objects or path expressions;
    expressions are parsed on construction, so an invalid pattern raises
    AddressSyntaxError here rather than being ignored during the walk.
    """
    compare_mode: CompareMode = CompareMode.STRICT
    numeric_mode: NumericMode = NumericMode.STRICT
    ignore_paths: tuple[Address, ...] = ()
    ignore_orders: tuple[Address, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "ignore_paths", _to_addresses(self.ignore_paths))
        object.__setattr__(self, "ignore_orders", _to_addresses(self.ignore_orders))

    @classmethod
    def inclusive(cls) -> CompareConfig:
        return cls(compare_mode=CompareMode.INCLUSIVE)

    @classmethod
    def strict(cls) -> CompareConfig:
        return cls(compare_mode=CompareMode.STRICT)

    def with_compare_mode(self, compare_mode: CompareMode) -> CompareConfig:
        return replace(self, compare_mode=compare_mode)

    def with_numeric_mode(self, numeric_mode: NumericMode) -> CompareConfig:
        return replace(self, numeric_mode=numeric_mode)

    def ignore_path(self, path: PathLike) -> CompareConfig:
        """Return a copy that also suppresses differences at and below ``path``."""
        return replace(self, ignore_paths=self.ignore_paths + _to_addresses([path]))

    def ignore_order(self, path: PathLike) -> CompareConfig:
        """Return a copy that compares arrays at ``path`` as unordered collections."""
        return replace(self, ignore_orders=self.ignore_orders + _to_addresses([path]))

    def to_ignore(self, address: Address) -> bool:
        return any(pattern.prefixes(address) for pattern in self.ignore_paths)

    def to_ignore_order(self, address: Address) -> bool:
        return any(pattern.matches(address) for pattern in self.ignore_orders)

    def to_dict(self) -> dict:
        return {
            "compare_mode": self.compare_mode.value,
            "numeric_mode": self.numeric_mode.value,
            "ignore_paths": [p.to_jsonpath() for p in self.ignore_paths],
            "ignore_orders": [p.to_jsonpath() for p in self.ignore_orders],
        }


@dataclass(frozen=True)
class Difference:
    """A single located mismatch between the actual and expected documents."""
    path: Address
    actual: Any = MISSING
    expected: Any = MISSING
    compare_mode: CompareMode = CompareMode.STRICT

    def __post_init__(self):
        if self.actual is MISSING and self.expected is MISSING:
            raise ValueError(f"Difference at {self.path} is missing from both sides")
        if self.compare_mode == CompareMode.INCLUSIVE and self.expected is MISSING:
            raise ValueError(
                f"Difference at {self.path}: inclusive comparison never reports "
                f"members missing from expected"
            )

    @property
    def missing_from(self) -> Optional[str]:
        """Which side lacks the member: 'actual', 'expected' or None."""
        if self.actual is MISSING:
            return "actual"
        if self.expected is MISSING:
            return "expected"
        return None

    def render(self) -> str:
        side = self.missing_from
        if side is not None:
            return f'json atom at path "{self.path}" is missing from {side}'

        return "\n".join([
            f'json atoms at path "{self.path}" are not equal:',
            "    actual:",
            indent(to_pretty_json(self.actual), 8),
            "    expected:",
            indent(to_pretty_json(self.expected), 8),
        ])

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "actual": None if self.actual is MISSING else self.actual,
            "expected": None if self.expected is MISSING else self.expected,
            "missing_from": self.missing_from,
            "compare_mode": self.compare_mode.value,
            "message": self.render(),
        }


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    max_depth: int = 100
    log_level: LogLevel = LogLevel.INFO


@dataclass
class ExecutionInfo:
    """Execution metadata."""
    duration_ms: int
    timestamp: str
    engine_version: str = "1.0.0"

    def to_dict(self) -> dict:
        return {
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
            "engine_version": self.engine_version,
        }


@dataclass
class Summary:
    """Summary statistics of comparison."""
    mismatches_found: int = 0
    ignore_paths: int = 0
    ignore_orders: int = 0

    def to_dict(self) -> dict:
        return {
            "mismatches_found": self.mismatches_found,
            "ignore_paths": self.ignore_paths,
            "ignore_orders": self.ignore_orders,
        }


@dataclass
class DiffReport:
    """Complete comparison report."""
    is_match: bool
    execution: ExecutionInfo
    summary: Summary
    diffs: list[Difference] = field(default_factory=list)

    def render(self) -> str:
        return "\n\n".join(d.render() for d in self.diffs)

    def to_dict(self) -> dict:
        return {
            "is_match": self.is_match,
            "execution": self.execution.to_dict(),
            "summary": self.summary.to_dict(),
            "diffs": [d.to_dict() for d in self.diffs],
        }

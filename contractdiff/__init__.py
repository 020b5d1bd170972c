"""
contractdiff - Structural JSON comparison for API contract tests

Compares an actual JSON document against an expected one under a
configurable policy (inclusive or strict comparison, numeric handling,
ignored paths, order-insensitive arrays) and reports every difference
located by a JSONPath-like Address.
"""

from .address import (
    Address,
    Field,
    Index,
    IndexRange,
    IndexRangeFrom,
    IndexRangeTo,
    WildcardField,
    WildcardIndex,
    is_valid_address,
    parse_address,
    prefixes,
)
from .config_loader import config_from_dict, config_from_yaml, config_to_yaml, load_config
from .differ import Differ, diff, has_difference
from .engine import DiffEngine, compare
from .exceptions import (
    AddressSyntaxError,
    CaptureError,
    ConfigError,
    ContractDiffError,
    MaxDepthExceededError,
)
from .jsonpath_utils import capture_value, capture_variables, find_values
from .models import (
    MISSING,
    CompareConfig,
    CompareMode,
    Difference,
    DiffReport,
    EngineConfig,
    LogLevel,
    NumericMode,
)

__version__ = "1.0.0"
__all__ = [
    # Addresses
    "Address",
    "Field",
    "Index",
    "IndexRange",
    "IndexRangeFrom",
    "IndexRangeTo",
    "WildcardField",
    "WildcardIndex",
    "is_valid_address",
    "parse_address",
    "prefixes",
    # Diffing
    "Differ",
    "diff",
    "has_difference",
    "CompareConfig",
    "CompareMode",
    "NumericMode",
    "Difference",
    "MISSING",
    # Engine
    "DiffEngine",
    "EngineConfig",
    "LogLevel",
    "DiffReport",
    "compare",
    # Config files
    "config_from_dict",
    "config_from_yaml",
    "config_to_yaml",
    "load_config",
    # Capture
    "capture_value",
    "capture_variables",
    "find_values",
    # Errors
    "ContractDiffError",
    "AddressSyntaxError",
    "ConfigError",
    "CaptureError",
    "MaxDepthExceededError",
]

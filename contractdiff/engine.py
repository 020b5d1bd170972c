"""Main comparison engine for contractdiff."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from .differ import Differ
from .exceptions import MaxDepthExceededError
from .models import (
    CompareConfig,
    DiffReport,
    EngineConfig,
    ExecutionInfo,
    LogLevel,
    Summary,
)
from .utils import get_json_depth

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class DiffEngine:
    """
    Compares an actual JSON document against an expected one and wraps the
    differences in a DiffReport.

    The engine bounds the nesting depth of its inputs before walking them;
    everything else about the comparison is decided by the CompareConfig
    passed to ``compare``.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()
        self._log_level = _LOG_LEVELS[self.config.log_level]

    def compare(
        self,
        actual: Any,
        expected: Any,
        compare_config: Optional[CompareConfig] = None
    ) -> DiffReport:
        """
        Compare two JSON documents.

        Args:
            actual: The document returned by the system under test
            expected: The document it must agree with
            compare_config: Comparison policy (strict by default)

        Returns:
            DiffReport listing every difference

        Raises:
            MaxDepthExceededError: if either document nests deeper than max_depth
        """
        start_time = time.time()
        compare_config = compare_config or CompareConfig()

        self._validate_depth(actual, "actual")
        self._validate_depth(expected, "expected")

        diffs = Differ(compare_config).diff(actual, expected)
        duration_ms = int((time.time() - start_time) * 1000)

        self._log(
            logging.INFO,
            "Compared documents (%s, %s): %d difference(s) in %dms",
            compare_config.compare_mode.value,
            compare_config.numeric_mode.value,
            len(diffs),
            duration_ms
        )

        return DiffReport(
            is_match=not diffs,
            execution=ExecutionInfo(
                duration_ms=duration_ms,
                timestamp=datetime.now(timezone.utc).isoformat(),
                engine_version=self.VERSION
            ),
            summary=Summary(
                mismatches_found=len(diffs),
                ignore_paths=len(compare_config.ignore_paths),
                ignore_orders=len(compare_config.ignore_orders)
            ),
            diffs=diffs
        )

    def _validate_depth(self, document: Any, side: str):
        depth = get_json_depth(document, self.config.max_depth)
        if depth > self.config.max_depth:
            self._log(logging.WARNING, "Rejected %s document nested deeper than %d",
                      side, self.config.max_depth)
            raise MaxDepthExceededError(self.config.max_depth, side)

    def _log(self, level: int, msg: str, *args):
        # EngineConfig.log_level filters this engine's records only
        if level >= self._log_level:
            logger.log(level, msg, *args)


def compare(
    actual: Any,
    expected: Any,
    compare_config: Optional[CompareConfig] = None,
    config: Optional[EngineConfig] = None
) -> DiffReport:
    """
    Convenience function to compare two JSON documents.

    Args:
        actual: The document returned by the system under test
        expected: The document it must agree with
        compare_config: Comparison policy
        config: Optional engine configuration

    Returns:
        DiffReport
    """
    engine = DiffEngine(config)
    return engine.compare(actual, expected, compare_config)

"""Loading comparison policies from YAML/JSON files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import yaml

from .exceptions import AddressSyntaxError, ConfigError
from .models import CompareConfig, CompareMode, NumericMode

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"compare_mode", "numeric_mode", "ignore_paths", "ignore_orders"}


def _parse_enum(enum_cls, data: dict, key: str, default):
    raw = data.get(key)
    if raw is None:
        return default
    if not isinstance(raw, str):
        raise ConfigError(key, f"expected a string, got {type(raw).__name__}")
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigError(key, f"unknown value '{raw}' (expected one of: {allowed})")


def _parse_paths(data: dict, key: str) -> list[str]:
    raw = data.get(key)
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not all(isinstance(p, str) for p in raw):
        raise ConfigError(key, "expected a list of path expressions")
    return raw


def config_from_dict(data: dict) -> CompareConfig:
    """
    Build a CompareConfig from a plain mapping.

    Recognised keys: compare_mode (inclusive|strict), numeric_mode
    (strict|assume_float), ignore_paths and ignore_orders (lists of path
    expressions). Missing keys take the strict defaults.

    Raises:
        ConfigError: on unknown keys, wrong types or invalid paths
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("<root>", f"expected a mapping, got {type(data).__name__}")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(unknown[0], "unknown key")

    compare_mode = _parse_enum(CompareMode, data, "compare_mode", CompareMode.STRICT)
    numeric_mode = _parse_enum(NumericMode, data, "numeric_mode", NumericMode.STRICT)

    config = CompareConfig(compare_mode=compare_mode, numeric_mode=numeric_mode)
    for key, add in (("ignore_paths", CompareConfig.ignore_path),
                     ("ignore_orders", CompareConfig.ignore_order)):
        for path in _parse_paths(data, key):
            try:
                config = add(config, path)
            except AddressSyntaxError as e:
                raise ConfigError(key, str(e)) from e

    logger.debug("Loaded comparison config: %s", config.to_dict())
    return config


def config_from_yaml(content: str) -> CompareConfig:
    """Build a CompareConfig from YAML (or JSON) text."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError("<document>", f"failed to parse: {e}") from e
    return config_from_dict(data)


def load_config(path: Union[str, Path]) -> CompareConfig:
    """Load a CompareConfig from a YAML or JSON file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        content = f.read()

    return config_from_yaml(content)


def config_to_yaml(config: CompareConfig) -> str:
    """Serialize a CompareConfig in the format accepted by ``config_from_yaml``."""
    return yaml.safe_dump(config.to_dict(), sort_keys=False)

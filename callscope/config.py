"""
callscope/config.py
Persistent settings in callscope_config.json.
Loaded by the CLI and API only; parser and aggregator take plain arguments.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "callscope_config.json"

DEFAULT_CONFIG = {
    "model": "llama3.1:8b",
    "ollama_host": "http://localhost:11434",
    "insights_enabled": False,
    "top_n": 5,
    "insight_limit": 50,
    "timeout_sec": 120,
}

# Keys whose value must be an int >= the given minimum
INT_MINIMUMS = {
    "top_n": 0,
    "insight_limit": 0,
    "timeout_sec": 1,
}


def _config_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path.cwd()
    return root / CONFIG_FILENAME


def validate_config_value(key: str, value: Any) -> Any:
    """
    Check one value against the type of its default.
    Raises ValueError for unknown keys, wrong types or out-of-range ints.
    """
    if key not in DEFAULT_CONFIG:
        raise ValueError(f"unknown config key: {key}")
    expected = type(DEFAULT_CONFIG[key])
    # bool is an int subclass; never accept one for the other
    if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
        raise ValueError(f"{key} must be {expected.__name__}, got {type(value).__name__}")
    minimum = INT_MINIMUMS.get(key)
    if minimum is not None and value < minimum:
        raise ValueError(f"{key} must be >= {minimum}, got {value}")
    if expected is str and not value.strip():
        raise ValueError(f"{key} must not be empty")
    return value


def validate_config_update(update: Dict[str, Any]) -> Dict[str, Any]:
    """Validate known keys of an update. Unknown keys are ignored."""
    return {
        key: validate_config_value(key, value)
        for key, value in update.items()
        if key in DEFAULT_CONFIG
    }


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load config from callscope_config.json. Returns defaults if missing.
    Invalid stored values fall back to their defaults.
    """
    path = _config_path(project_root)
    config = dict(DEFAULT_CONFIG)
    if not path.exists():
        return config
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("config root must be a JSON object")
    except (json.JSONDecodeError, ValueError, OSError) as e:
        logger.warning(f"Config load failed: {e}")
        return config

    for key, value in data.items():
        if key not in DEFAULT_CONFIG:
            continue
        try:
            config[key] = validate_config_value(key, value)
        except ValueError as e:
            logger.warning(f"Ignoring config value: {e}")
    return config


def save_config(config: Dict[str, Any], project_root: Optional[Path] = None) -> Path:
    """Persist config to callscope_config.json."""
    path = _config_path(project_root)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path

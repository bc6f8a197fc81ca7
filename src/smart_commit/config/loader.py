"""
Configuration loader for smart_commit.

Configuration is optional. The loader looks for ``.smart_commit.json``
in the repository root first and then for ``config.json`` in the
``~/.smart_commit/`` directory. When neither exists the built-in
defaults are used. A file that exists but is malformed raises
:class:`ConfigError`.

Example::

    {
        "weights": {"file_weight": 0.6, "content_weight": 0.4},
        "thresholds": {"high_confidence": 0.8},
        "extra_patterns": {"test": ["^e2e/.*$"]},
        "extra_keywords": {"perf": ["faster", "latency"]},
        "commit": {"max_first_line_length": 100}
    }
"""

from __future__ import annotations

import copy
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

from smart_commit.detection.models import COMMIT_TYPES
from smart_commit.detection.rules import ScoringWeights


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

CONFIG_FILENAME = ".smart_commit.json"
USER_CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "weights": {},
    "thresholds": {"high_confidence": 0.7, "medium_confidence": 0.4},
    "extra_patterns": {},
    "extra_keywords": {},
    "commit": {"min_description_length": 10, "max_first_line_length": 72},
}


class ConfigError(Exception):
    """Raised when a configuration file exists but is invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the user-level configuration directory, ``~/.smart_commit/``."""
    return Path.home() / ".smart_commit"


def _find_config_file(repo_root: Optional[Path]) -> Optional[Path]:
    candidates = []
    if repo_root is not None:
        candidates.append(repo_root / CONFIG_FILENAME)
    candidates.append(_get_config_directory() / USER_CONFIG_FILENAME)
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_weights(weights: Any) -> None:
    if not isinstance(weights, dict):
        raise ConfigError("'weights' must be an object")
    known = ScoringWeights.field_names()
    for key, value in weights.items():
        if key not in known:
            raise ConfigError(f"Unknown weight '{key}'. Known weights: {', '.join(known)}")
        if not _is_number(value) or value < 0:
            raise ConfigError(f"Weight '{key}' must be a non-negative number")
    for key in ("content_normalizer", "combined_normalizer"):
        if key in weights and weights[key] == 0:
            raise ConfigError(f"Weight '{key}' must not be zero")


def _validate_thresholds(thresholds: Any) -> None:
    if not isinstance(thresholds, dict):
        raise ConfigError("'thresholds' must be an object")
    for key, value in thresholds.items():
        if key not in DEFAULT_CONFIG["thresholds"]:
            raise ConfigError(f"Unknown threshold '{key}'")
        if not _is_number(value) or not 0 <= value <= 1:
            raise ConfigError(f"Threshold '{key}' must be a number between 0 and 1")


def _validate_rule_map(name: str, rules: Any, compile_patterns: bool) -> None:
    if not isinstance(rules, dict):
        raise ConfigError(f"'{name}' must be an object mapping commit types to lists")
    for category, entries in rules.items():
        if category not in COMMIT_TYPES:
            raise ConfigError(f"'{name}' refers to unknown commit type '{category}'")
        if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
            raise ConfigError(f"'{name}.{category}' must be a list of strings")
        if compile_patterns:
            for entry in entries:
                try:
                    re.compile(entry)
                except re.error as exc:
                    raise ConfigError(f"Invalid pattern in '{name}.{category}': {entry!r} ({exc})") from exc


def _validate_commit(commit: Any) -> None:
    if not isinstance(commit, dict):
        raise ConfigError("'commit' must be an object")
    for key, value in commit.items():
        if key not in DEFAULT_CONFIG["commit"]:
            raise ConfigError(f"Unknown commit setting '{key}'")
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ConfigError(f"'commit.{key}' must be a positive integer")


def load_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load the smart_commit configuration and fill in defaults.

    Args:
        repo_root: Repository root searched for ``.smart_commit.json``.
            When None, only the user-level file is considered.

    Returns:
        A dictionary with the keys ``weights``, ``thresholds``,
        ``extra_patterns``, ``extra_keywords`` and ``commit``. Sections
        missing from the file take their default values.

    Raises:
        ConfigError: If a configuration file exists but is malformed or
            contains invalid values.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = _find_config_file(repo_root)
    if config_path is None:
        logger.debug("No configuration file found, using defaults")
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    for key in data:
        if key not in DEFAULT_CONFIG:
            logger.debug("Ignoring unknown configuration key: %s", key)

    if "weights" in data:
        _validate_weights(data["weights"])
        config["weights"].update(data["weights"])
    if "thresholds" in data:
        _validate_thresholds(data["thresholds"])
        config["thresholds"].update(data["thresholds"])
    if "extra_patterns" in data:
        _validate_rule_map("extra_patterns", data["extra_patterns"], compile_patterns=True)
        config["extra_patterns"] = data["extra_patterns"]
    if "extra_keywords" in data:
        _validate_rule_map("extra_keywords", data["extra_keywords"], compile_patterns=False)
        config["extra_keywords"] = data["extra_keywords"]
    if "commit" in data:
        _validate_commit(data["commit"])
        config["commit"].update(data["commit"])

    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config

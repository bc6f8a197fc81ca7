"""
Configuration loading for smart_commit.

Provides a loader for the optional JSON configuration that tunes the
detector. See :mod:`smart_commit.config.loader` for details.
"""

from .loader import ConfigError, load_config  # noqa: F401

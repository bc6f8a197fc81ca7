"""
Top-level package for smart_commit.

This package exposes the main CLI entry point via the
``smart_commit.cli`` module and the detector via
``smart_commit.detection``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"

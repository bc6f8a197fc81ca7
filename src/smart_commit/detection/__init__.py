"""
Commit type detection.

This package scores a pending change set against per-category rule
tables and picks the most likely Conventional Commit type. See
:mod:`smart_commit.detection.detector` for the entry point.
"""

from .description import generate_description  # noqa: F401
from .detector import SmartCommitDetector  # noqa: F401
from .models import COMMIT_TYPES, AnalysisResult, Detection  # noqa: F401
from .rules import DEFAULT_RULES, DEFAULT_WEIGHTS, RuleSet, ScoringWeights  # noqa: F401

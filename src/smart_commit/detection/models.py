"""
Data models for commit type detection.

:data:`COMMIT_TYPES` is the closed set of Conventional Commit types the
detector can emit. An :class:`AnalysisResult` is produced by each of the
two scorers, and a :class:`Detection` is the final answer handed to the
commit workflow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


COMMIT_TYPES = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "perf",
    "test",
    "build",
    "ci",
    "chore",
    "revert",
)

COMMIT_TYPE_DESCRIPTIONS: Dict[str, str] = {
    "feat": "A new feature",
    "fix": "A bug fix",
    "docs": "Documentation only changes",
    "style": "Changes that do not affect the meaning of the code",
    "refactor": "A code change that neither fixes a bug nor adds a feature",
    "perf": "A code change that improves performance",
    "test": "Adding missing tests or correcting existing tests",
    "build": "Changes that affect the build system or external dependencies",
    "ci": "Changes to our CI configuration files and scripts",
    "chore": "Other changes that don't modify src or test files",
    "revert": "Reverts a previous commit",
}


@dataclass
class AnalysisResult:
    """Outcome of a single scoring pass.

    Attributes
    ----------
    type : str
        Category with the highest score.
    confidence : float
        Heuristic confidence. Not bounded to ``[0, 1]`` for the file
        scorer; :class:`Detection` clamps it.
    reason : str
        Human readable trace for the winning category.
    all_scores : Dict[str, float]
        Score of every category, zero when nothing matched.
    """

    type: str
    confidence: float
    reason: str
    all_scores: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Detection:
    """Final classification of a pending change set."""

    type: str
    confidence: float
    reason: str
    file_analysis: Optional[AnalysisResult] = field(default=None, compare=False, repr=False)
    content_analysis: Optional[AnalysisResult] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.type not in COMMIT_TYPES:
            raise ValueError(f"Unknown commit type: {self.type!r}")
        clamped = min(max(float(self.confidence), 0.0), 1.0)
        object.__setattr__(self, "confidence", clamped)

"""
Smart commit type detection.

:class:`SmartCommitDetector` reads the pending change set through a
:class:`~smart_commit.vcs.inspector.RepositoryInspector`, runs the
scoring engine and returns a :class:`Detection`. It never raises: VCS
failures are treated as missing data and any other error degrades to a
low-confidence ``chore`` so the caller can fall back to manual input.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from smart_commit.vcs.git_client import GitError
from smart_commit.vcs.inspector import RepositoryInspector

from .description import generate_description
from .models import Detection
from .rules import DEFAULT_RULES, DEFAULT_WEIGHTS, RuleSet, ScoringWeights
from .scoring import combine_analyses, score_content, score_files


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

T = TypeVar("T")


def _unique(paths: Sequence[str]) -> List[str]:
    seen = set()
    result = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            result.append(path)
    return result


class SmartCommitDetector:
    """Detect the Conventional Commit type of the pending changes.

    Parameters
    ----------
    inspector : RepositoryInspector
        Source of file lists and the staged diff.
    rules : RuleSet, optional
        Rule tables; defaults to :data:`DEFAULT_RULES`.
    weights : ScoringWeights, optional
        Scoring constants; defaults to :data:`DEFAULT_WEIGHTS`.
    """

    def __init__(
        self,
        inspector: RepositoryInspector,
        rules: Optional[RuleSet] = None,
        weights: Optional[ScoringWeights] = None,
    ) -> None:
        self.inspector = inspector
        self.rules = rules or DEFAULT_RULES
        self.weights = weights or DEFAULT_WEIGHTS

    def _query(self, name: str, fn: Callable[[], T], default: T) -> T:
        try:
            return fn()
        except GitError as exc:
            logger.warning("Could not read %s: %s", name, exc)
            return default

    def changed_files(self) -> List[str]:
        """Return the de-duplicated union of staged and modified paths."""
        staged = self._query("staged files", self.inspector.staged_files, [])
        modified = self._query("modified files", self.inspector.modified_files, [])
        return _unique(list(staged) + list(modified))

    def detect_commit_type(self) -> Detection:
        """Analyse the pending changes and return the best guess."""
        try:
            logger.info("Analyzing changes for smart commit type detection")
            all_files = self.changed_files()
            if not all_files:
                logger.warning("No changes detected")
                return Detection(type="chore", confidence=0.5, reason="No changes found")

            added = self._query("added files", self.inspector.added_files, [])
            file_analysis = score_files(all_files, added, self.rules, self.weights)

            diff = self._query("staged diff", self.inspector.staged_diff, "")
            content_analysis = score_content(diff, self.rules, self.weights)

            detection = combine_analyses(file_analysis, content_analysis, self.rules, self.weights)
            logger.info(
                "Detected type: %s (confidence: %.1f%%)", detection.type, detection.confidence * 100
            )
            logger.info("Reason: %s", detection.reason)
            return detection
        except Exception as exc:
            logger.error("Detection failed: %s", exc, exc_info=True)
            return Detection(type="chore", confidence=0.3, reason="Fallback due to error")

    def generate_smart_description(self, commit_type: str, files: Optional[Sequence[str]] = None) -> str:
        """Describe the change for ``commit_type``.

        Uses :meth:`changed_files` when ``files`` is not given.
        """
        try:
            if files is None:
                files = self.changed_files()
            return generate_description(commit_type, files)
        except Exception as exc:
            logger.warning("Smart description generation failed: %s", exc)
            return "update code"

"""
Scoring engine for commit type detection.

Two independent passes score every category: :func:`score_files` looks
at changed paths, :func:`score_content` at keywords in the staged diff.
:func:`combine_analyses` blends both with fixed weights and hands over to
:func:`apply_fallback_heuristics` when the blended confidence is too low
to trust. All functions are pure; they never touch the repository.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Sequence

from .models import AnalysisResult, Detection
from .rules import DEFAULT_RULES, DEFAULT_WEIGHTS, RuleSet, ScoringWeights, empty_scores


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def _argmax(scores: Mapping[str, float], order: Sequence[str]) -> str:
    # Ties go to the category listed last in ``order``.
    best = order[0]
    for name in order:
        if scores.get(name, 0.0) >= scores.get(best, 0.0):
            best = name
    return best


def score_files(
    files: Sequence[str],
    added_files: Sequence[str] = (),
    rules: RuleSet = DEFAULT_RULES,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> AnalysisResult:
    """Score categories from the changed file paths.

    Parameters
    ----------
    files : Sequence[str]
        De-duplicated union of staged and modified paths.
    added_files : Sequence[str]
        Newly added paths. Any recognised source file among them grants
        ``feat`` a flat bonus.
    rules : RuleSet
        Rule tables to evaluate.
    weights : ScoringWeights
        Scoring constants.

    Returns
    -------
    AnalysisResult
        Winner, ``score / max(len(files), 1)`` as confidence and the
        per-category scores.

    Notes
    -----
    Each file counts at most once per category, no matter how many of
    that category's patterns it matches.
    """
    scores = empty_scores(rules)
    reasons: Dict[str, List[str]] = {name: [] for name in rules.order}

    for path in files:
        for category_rules in rules.categories:
            if category_rules.match_path(path) is not None:
                scores[category_rules.category] += 1
                reasons[category_rules.category].append(
                    f"Matches {category_rules.category} pattern: {path}"
                )

    if added_files and any(rules.is_source_file(path) for path in added_files):
        scores["feat"] += weights.new_source_bonus
        reasons["feat"].append(f"{len(added_files)} new source files added")

    winner = _argmax(scores, rules.order)
    confidence = scores[winner] / max(len(files), 1)
    reason = ", ".join(reasons[winner]) or "Pattern-based detection"
    logger.debug("File scores: %s", scores)
    return AnalysisResult(type=winner, confidence=confidence, reason=reason, all_scores=scores)


def score_content(
    diff: str,
    rules: RuleSet = DEFAULT_RULES,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> AnalysisResult:
    """Score categories from keyword hits in the staged diff.

    Every occurrence of a keyword adds ``weights.keyword_increment`` to
    its category. The fix-specific diff patterns add
    ``weights.fix_pattern_increment`` per match to ``fix``.
    """
    if not diff or not diff.strip():
        return AnalysisResult(
            type="chore", confidence=0.0, reason="No diff content", all_scores=empty_scores(rules)
        )

    content = diff.lower()
    scores = empty_scores(rules)
    for category_rules in rules.categories:
        for regex in category_rules.keyword_patterns:
            hits = len(regex.findall(content))
            if hits:
                scores[category_rules.category] += hits * weights.keyword_increment

    for pattern in rules.fix_patterns:
        hits = len(pattern.findall(content))
        if hits:
            scores["fix"] += hits * weights.fix_pattern_increment

    winner = _argmax(scores, rules.order)
    logger.debug("Content scores: %s", scores)
    return AnalysisResult(
        type=winner,
        confidence=scores[winner] / weights.content_normalizer,
        reason=f"Content analysis: {scores[winner]:g} keyword matches",
        all_scores=scores,
    )


def combine_scores(
    file_analysis: AnalysisResult,
    content_analysis: AnalysisResult,
    rules: RuleSet = DEFAULT_RULES,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Dict[str, float]:
    """Blend the two score maps linearly, category by category."""
    return {
        name: file_analysis.all_scores.get(name, 0.0) * weights.file_weight
        + content_analysis.all_scores.get(name, 0.0) * weights.content_weight
        for name in rules.order
    }


def combine_analyses(
    file_analysis: AnalysisResult,
    content_analysis: AnalysisResult,
    rules: RuleSet = DEFAULT_RULES,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Detection:
    """Merge file and content analyses into a :class:`Detection`."""
    combined = combine_scores(file_analysis, content_analysis, rules, weights)
    winner = _argmax(combined, rules.order)
    confidence = min(combined[winner] / weights.combined_normalizer, 1.0)
    logger.debug("Combined scores: %s (winner %s at %.3f)", combined, winner, confidence)

    if confidence < weights.fallback_threshold:
        return apply_fallback_heuristics(file_analysis, content_analysis, weights)

    return Detection(
        type=winner,
        confidence=confidence,
        reason=f"Combined analysis: {file_analysis.reason} + {content_analysis.reason}",
        file_analysis=file_analysis,
        content_analysis=content_analysis,
    )


def apply_fallback_heuristics(
    file_analysis: AnalysisResult,
    content_analysis: AnalysisResult,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> Detection:
    """Pick a category when the combined score is too weak to trust."""
    if file_analysis.type == "docs" and file_analysis.confidence > weights.fallback_trigger:
        return Detection(
            type="docs",
            confidence=weights.docs_fallback_confidence,
            reason="Only documentation files modified",
            file_analysis=file_analysis,
            content_analysis=content_analysis,
        )
    if file_analysis.type == "chore" and file_analysis.confidence > weights.fallback_trigger:
        return Detection(
            type="chore",
            confidence=weights.chore_fallback_confidence,
            reason="Only configuration files modified",
            file_analysis=file_analysis,
            content_analysis=content_analysis,
        )
    return Detection(
        type="feat",
        confidence=weights.default_fallback_confidence,
        reason="Default fallback - assuming feature development",
        file_analysis=file_analysis,
        content_analysis=content_analysis,
    )

"""
Static rule tables used to score a change set.

Each category owns a list of path patterns, tested against repository
relative paths, and a list of keywords, counted as whole words in the
staged diff. Rule sets are immutable: :meth:`RuleSet.extended` returns a
new set instead of changing the receiver, so a single
:data:`DEFAULT_RULES` instance can be shared safely.

The scoring constants live in :class:`ScoringWeights` so they can be
tuned from configuration without touching the scoring code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Tuple

from .models import COMMIT_TYPES


@dataclass(frozen=True)
class CategoryRules:
    """Path patterns and diff keywords belonging to one category."""

    category: str
    patterns: Tuple[Pattern[str], ...] = ()
    keywords: Tuple[str, ...] = ()
    keyword_patterns: Tuple[Pattern[str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        compiled = tuple(re.compile(rf"\b{re.escape(kw)}\b", re.IGNORECASE) for kw in self.keywords)
        object.__setattr__(self, "keyword_patterns", compiled)

    def match_path(self, path: str) -> Optional[Pattern[str]]:
        """Return the first pattern matching ``path``, if any."""
        for pattern in self.patterns:
            if pattern.search(path):
                return pattern
        return None


@dataclass(frozen=True)
class RuleSet:
    """Ordered collection of :class:`CategoryRules` covering every category.

    The order matters: when two categories tie for the highest score the
    one listed last wins.
    """

    categories: Tuple[CategoryRules, ...]
    source_extensions: Tuple[str, ...]
    fix_patterns: Tuple[Pattern[str], ...]

    def __post_init__(self) -> None:
        names = [rules.category for rules in self.categories]
        missing = [name for name in COMMIT_TYPES if name not in names]
        if missing:
            raise ValueError(f"Rule set is missing categories: {', '.join(missing)}")
        unknown = [name for name in names if name not in COMMIT_TYPES]
        if unknown:
            raise ValueError(f"Rule set has unknown categories: {', '.join(unknown)}")

    @property
    def order(self) -> Tuple[str, ...]:
        return tuple(rules.category for rules in self.categories)

    def get(self, category: str) -> CategoryRules:
        for rules in self.categories:
            if rules.category == category:
                return rules
        raise KeyError(category)

    def is_source_file(self, path: str) -> bool:
        suffix = path.rsplit(".", 1)[-1] if "." in path else ""
        return suffix in self.source_extensions

    def extended(
        self,
        extra_patterns: Optional[Mapping[str, Iterable[str]]] = None,
        extra_keywords: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> "RuleSet":
        """Return a copy with user supplied rules appended.

        Raises
        ------
        KeyError
            If a mapping names a category outside :data:`COMMIT_TYPES`.
        re.error
            If an extra pattern does not compile.
        """
        extra_patterns = extra_patterns or {}
        extra_keywords = extra_keywords or {}
        for name in list(extra_patterns) + list(extra_keywords):
            if name not in COMMIT_TYPES:
                raise KeyError(name)

        updated: List[CategoryRules] = []
        for rules in self.categories:
            patterns = rules.patterns + tuple(
                re.compile(p) for p in extra_patterns.get(rules.category, ())
            )
            keywords = rules.keywords + tuple(extra_keywords.get(rules.category, ()))
            updated.append(replace(rules, patterns=patterns, keywords=keywords))
        return replace(self, categories=tuple(updated))


@dataclass(frozen=True)
class ScoringWeights:
    """Tuning constants for the scoring engine.

    The defaults are heuristic and the normalizers are not derived from
    any probabilistic model; confidences are only comparable within one
    stage of the pipeline.
    """

    file_weight: float = 0.7
    content_weight: float = 0.3
    keyword_increment: float = 0.5
    fix_pattern_increment: float = 1.0
    new_source_bonus: float = 2.0
    content_normalizer: float = 10.0
    combined_normalizer: float = 3.0
    fallback_threshold: float = 0.3
    fallback_trigger: float = 0.5
    docs_fallback_confidence: float = 0.8
    chore_fallback_confidence: float = 0.7
    default_fallback_confidence: float = 0.4

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "ScoringWeights":
        return cls(**{key: float(value) for key, value in values.items()})


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


_FEAT = CategoryRules(
    "feat",
    _compile(
        r"^src/.*\.(js|ts|jsx|tsx|py|go|rs|php|java)$",
        r"^.*/.*\.component\.(js|ts|jsx|tsx)$",
        r"^.*/.*\.service\.(js|ts|py|go)$",
        r"^.*/.*\.controller\.(js|ts|py|php|java)$",
        r"^api/.*\.(js|ts|py|go|php)$",
        r"^lib/.*$",
        r"^components/.*$",
        r"^features/.*$",
    ),
    (
        "add",
        "new",
        "create",
        "implement",
        "introduce",
        "feature",
        "functionality",
        "capability",
        "support",
    ),
)

# fix is recognised from diff content only
_FIX = CategoryRules(
    "fix",
    (),
    (
        "fix",
        "bug",
        "issue",
        "error",
        "crash",
        "problem",
        "resolve",
        "correct",
        "patch",
        "repair",
        "debug",
    ),
)

_DOCS = CategoryRules(
    "docs",
    _compile(
        r"^.*\.md$",
        r"^docs/.*$",
        r"^README.*$",
        r"^CHANGELOG.*$",
        r"^.*\.txt$",
        r"^.*/.*\.docs?\.(js|ts|py)$",
    ),
    ("document", "docs", "readme", "guide", "tutorial", "example", "comment", "explain", "clarify"),
)

_STYLE = CategoryRules(
    "style",
    _compile(
        r"^.*\.css$",
        r"^.*\.scss$",
        r"^.*\.less$",
        r"^.*\.style\.(js|ts)$",
        r"^styles/.*$",
        r"^assets/.*\.(css|scss|less)$",
    ),
    ("style", "css", "design", "theme", "layout", "color", "font", "spacing", "format", "prettier"),
)

_REFACTOR = CategoryRules(
    "refactor",
    (),
    ("refactor", "restructure", "reorganize", "cleanup", "optimize", "improve", "simplify", "extract", "rename"),
)

_PERF = CategoryRules("perf")

_TEST = CategoryRules(
    "test",
    _compile(
        r"^.*\.test\.(js|ts|py|go|rs|php|java)$",
        r"^.*\.spec\.(js|ts|py|go|rs|php|java)$",
        r"^tests?/.*$",
        r"^__tests__/.*$",
        r"^spec/.*$",
        r"^.*_test\.(py|go|rs)$",
    ),
    ("test", "spec", "coverage", "unittest", "e2e", "integration", "mock", "stub", "assert"),
)

_BUILD = CategoryRules(
    "build",
    _compile(
        r"^package\.json$",
        r"^package-lock\.json$",
        r"^yarn\.lock$",
        r"^pnpm-lock\.yaml$",
        r"^Cargo\.toml$",
        r"^Cargo\.lock$",
        r"^go\.mod$",
        r"^go\.sum$",
        r"^requirements\.txt$",
        r"^pyproject\.toml$",
        r"^Dockerfile$",
        r"^docker-compose\.ya?ml$",
        r"^webpack\.config\.(js|ts)$",
        r"^vite\.config\.(js|ts)$",
        r"^rollup\.config\.(js|ts)$",
        r"^babel\.config\.(js|json)$",
        r"^tsconfig\.json$",
    ),
    ("build", "compile", "bundle", "package", "dependency", "deps", "dependencies", "install", "setup", "config"),
)

_CI = CategoryRules(
    "ci",
    _compile(
        r"^\.github/workflows/.*\.ya?ml$",
        r"^\.gitlab-ci\.ya?ml$",
        r"^\.travis\.ya?ml$",
        r"^appveyor\.ya?ml$",
        r"^circle\.ya?ml$",
        r"^\.circleci/.*$",
        r"^jenkins.*$",
        r"^\.githooks/.*$",
    ),
    ("ci", "cd", "pipeline", "workflow", "action", "deploy", "deployment", "github", "gitlab"),
)

_REVERT = CategoryRules("revert")

_CHORE = CategoryRules(
    "chore",
    _compile(
        r"^\.gitignore$",
        r"^\.gitattributes$",
        r"^\.editorconfig$",
        r"^\.prettierrc.*$",
        r"^\.eslintrc.*$",
        r"^\.eslint\.config\.(js|ts)$",
        r"^\.stylelintrc.*$",
        r"^LICENSE$",
        r"^\.env.*$",
        r"^.*\.sample$",
        r"^scripts/.*$",
        r"^tools/.*$",
        r"^\.vscode/.*$",
        r"^\.cursor/.*$",
    ),
    ("chore", "maintenance", "housekeeping", "cleanup", "config", "settings", "ignore", "lint", "format"),
)

# chore stays last so that an all-zero score map resolves to it
DEFAULT_RULES = RuleSet(
    categories=(_FEAT, _FIX, _DOCS, _STYLE, _REFACTOR, _PERF, _TEST, _BUILD, _CI, _REVERT, _CHORE),
    source_extensions=("js", "ts", "jsx", "tsx", "py", "go", "rs", "php", "java", "c", "cpp", "cs"),
    fix_patterns=(
        re.compile(r"[-\s](bug|error|issue|crash|fail|exception|throw)", re.IGNORECASE),
        re.compile(r"\+[^+]*\b(fix|resolve|correct|patch)\b", re.IGNORECASE),
    ),
)

DEFAULT_WEIGHTS = ScoringWeights()


def empty_scores(rules: RuleSet) -> Dict[str, float]:
    """Return a score map with every category of ``rules`` set to zero."""
    return {name: 0.0 for name in rules.order}

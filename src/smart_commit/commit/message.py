"""
Conventional Commit message helpers.

Validation of hand-written messages, assembly of generated ones, and the
semantic version bump a message implies.
"""

from __future__ import annotations

import re
from typing import List, Optional

from smart_commit.detection.models import COMMIT_TYPES


HEADER_RE = re.compile(
    r"^(?P<type>" + "|".join(COMMIT_TYPES) + r")"
    r"(?:\((?P<scope>[^)]+)\))?"
    r"(?P<breaking>!)?"
    r":\s(?P<description>.+)"
)
SCOPE_RE = re.compile(r"^[a-z-]+$")


class CommitMessageError(Exception):
    """Raised when a commit message does not follow Conventional Commits."""

    pass


def validate_commit_format(
    message: str,
    min_description_length: int = 10,
    max_first_line_length: int = 72,
) -> List[str]:
    """Validate ``message`` and return non-fatal warnings.

    Parameters
    ----------
    message : str
        Full commit message; only the first line is checked.
    min_description_length : int
        Minimum number of characters after ``type(scope): ``.
    max_first_line_length : int
        First lines longer than this produce a warning.

    Returns
    -------
    List[str]
        Warnings about style issues that do not block the commit.

    Raises
    ------
    CommitMessageError
        If the header is malformed or the description is too short.
    """
    header = message.strip().splitlines()[0] if message.strip() else ""
    match = HEADER_RE.match(header)
    if not match:
        raise CommitMessageError(
            "Invalid commit format. Expected 'type(scope): description', "
            f"e.g. 'feat(auth): add login functionality'. Valid types: {', '.join(COMMIT_TYPES)}"
        )
    if len(match.group("description").strip()) < min_description_length:
        raise CommitMessageError(
            f"Description too short. Minimum {min_description_length} characters."
        )

    warnings = []
    if len(header) > max_first_line_length:
        warnings.append(
            f"Commit message is long ({len(header)} chars). Consider shortening."
        )
    return warnings


def build_commit_message(
    commit_type: str,
    description: str,
    scope: Optional[str] = None,
    breaking: bool = False,
    body: Optional[str] = None,
) -> str:
    """Assemble ``type(scope)!: description`` with an optional body."""
    if commit_type not in COMMIT_TYPES:
        raise CommitMessageError(f"Unknown commit type: {commit_type}")
    header = commit_type
    if scope:
        header += f"({scope})"
    if breaking:
        header += "!"
    header += f": {description.strip()}"
    if body and body.strip():
        return f"{header}\n\n{body.strip()}"
    return header


def get_version_bump_type(message: str) -> str:
    """Return ``major``, ``minor`` or ``patch`` for a commit message."""
    header = message.strip().splitlines()[0] if message.strip() else ""
    match = HEADER_RE.match(header)
    if (match and match.group("breaking")) or "BREAKING CHANGE" in message:
        return "major"
    if match and match.group("type") == "feat":
        return "minor"
    return "patch"


def confidence_level(confidence: float, high: float = 0.7, medium: float = 0.4) -> str:
    """Bucket a detection confidence into ``high``, ``medium`` or ``low``."""
    if confidence > high:
        return "high"
    if confidence > medium:
        return "medium"
    return "low"

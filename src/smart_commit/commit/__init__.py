"""
Commit message handling.

See :mod:`smart_commit.commit.message` for validation and assembly of
Conventional Commit messages.
"""

from .message import (  # noqa: F401
    CommitMessageError,
    build_commit_message,
    confidence_level,
    get_version_bump_type,
    validate_commit_format,
)

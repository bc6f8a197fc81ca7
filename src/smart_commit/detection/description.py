"""
Short commit descriptions derived from the detected type and file list.

The generated phrase is meant to follow ``<type>: `` in a Conventional
Commit subject line, so it starts lowercase and has no trailing period.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Sequence


_COMPONENT_RE = re.compile(r"component|widget|view", re.IGNORECASE)
_SERVICE_RE = re.compile(r"service|api|controller", re.IGNORECASE)
_DOC_RE = re.compile(r"\.(md|txt|rst)$", re.IGNORECASE)
_NON_MAIN_RE = re.compile(r"\.(test|spec|md|txt)$", re.IGNORECASE)


@dataclass
class FileCategories:
    """Changed files bucketed by role. A file may appear in several buckets."""

    components: List[str] = field(default_factory=list)
    services: List[str] = field(default_factory=list)
    docs: List[str] = field(default_factory=list)
    main: List[str] = field(default_factory=list)


def categorize_files(files: Sequence[str]) -> FileCategories:
    return FileCategories(
        components=[f for f in files if _COMPONENT_RE.search(f)],
        services=[f for f in files if _SERVICE_RE.search(f)],
        docs=[f for f in files if _DOC_RE.search(f)],
        main=[f for f in files if not _NON_MAIN_RE.search(f)],
    )


def generate_description(commit_type: str, files: Sequence[str]) -> str:
    """Compose a short description for ``commit_type`` over ``files``.

    >>> generate_description("style", ["app.css"])
    'update styling and formatting'
    >>> generate_description("chore", ["a", "b"])
    'update 2 files'
    """
    file_count = len(files)
    buckets = categorize_files(files)

    if commit_type == "feat":
        if buckets.components:
            return f"add new {buckets.components[0]} component"
        if buckets.services:
            return f"implement {buckets.services[0]} service"
        return "add new functionality"
    if commit_type == "fix":
        target = buckets.main[0] if buckets.main else "application"
        return f"resolve issue in {target}"
    if commit_type == "docs":
        if len(buckets.docs) == 1:
            return f"update {buckets.docs[0]}"
        return f"update documentation ({file_count} files)"
    if commit_type == "style":
        return "update styling and formatting"
    if commit_type == "refactor":
        return "refactor code structure"
    if commit_type == "test":
        return "add/update tests"
    if commit_type == "build":
        return "update build configuration"
    if commit_type == "ci":
        return "update CI/CD configuration"
    return f"update {file_count} file{'s' if file_count > 1 else ''}"

"""
Read-only view of a repository's pending change set.

The detector only depends on this protocol, so tests can hand it canned
file lists and diffs instead of a real repository.
"""

from __future__ import annotations

from typing import List, Protocol


class RepositoryInspector(Protocol):
    """Queries the detector needs. Implementations may raise on failure."""

    def staged_files(self) -> List[str]:
        ...

    def modified_files(self) -> List[str]:
        ...

    def added_files(self) -> List[str]:
        ...

    def staged_diff(self) -> str:
        ...

"""
Git client implementation for smart_commit.

This module wraps the Git commands the commit assistant needs: the four
read-only change-set queries used by the detector, plus staging and
committing for the CLI. All subprocess calls go through
:meth:`GitClient._run` so that unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


def _split_lines(output: str) -> List[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, if ``git`` cannot be executed, or if its output cannot
            be decoded.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except UnicodeDecodeError as e:
            logger.error("Unicode decode error in Git output: %s", e)
            raise GitError(f"Failed to decode Git output: {e}") from e
        except OSError as e:
            logger.error("Unable to execute git: %s", e)
            raise GitError(f"Unable to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Change set queries
    # ------------------------------------------------------------------
    def staged_files(self) -> List[str]:
        """Return paths staged for the next commit."""
        result = self._run(["diff", "--cached", "--name-only"])
        return _split_lines(result.stdout)

    def modified_files(self) -> List[str]:
        """Return paths with unstaged modifications in the working tree."""
        result = self._run(["diff", "--name-only"])
        return _split_lines(result.stdout)

    def added_files(self) -> List[str]:
        """Return staged paths that do not exist in HEAD yet.

        Parses ``git diff --cached --name-status`` and keeps the entries
        with status ``A``.
        """
        result = self._run(["diff", "--cached", "--name-status"])
        added = []
        for line in result.stdout.splitlines():
            if line.startswith("A\t"):
                added.append(line[2:].strip())
        return added

    def staged_diff(self) -> str:
        """Return the unified diff of the staged changes."""
        return self._run(["diff", "--cached"]).stdout

    # ------------------------------------------------------------------
    # Staging and committing
    # ------------------------------------------------------------------
    def stage_files(self, files: List[str]) -> None:
        """Stage the given files for commit.

        For deleted files, ``git rm`` is used; otherwise ``git add``.
        """
        for file in files:
            abs_path = self.repo_root / file
            if abs_path.exists():
                self._run(["add", "--", file], check=True)
            else:
                self._run(["rm", "--", file], check=True)

    def commit(self, message: str, no_verify: bool = False) -> None:
        """Create a commit with the given message.

        Multi-line commit messages are supported. ``no_verify`` skips the
        repository's pre-commit and commit-msg hooks. If the commit
        fails, a GitError is raised.
        """
        args = ["commit", "-m", message]
        if no_verify:
            args.append("--no-verify")
        self._run(args, check=True)

"""
Version control system (VCS) integration.

This package contains the read-only :class:`RepositoryInspector`
protocol consumed by the detector and the Git client that implements
it. The client also stages files and creates commits for the CLI.
"""

from .git_client import GitClient, GitError  # noqa: F401
from .inspector import RepositoryInspector  # noqa: F401

"""
Command line interface for the smart_commit tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``smartcommit`` command. It orchestrates
repository detection, configuration loading, commit type detection,
interaction with the user and the actual commit. Exit codes are listed
below and documented in the README.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from smart_commit import __version__
from smart_commit.commit.message import (
    SCOPE_RE,
    CommitMessageError,
    build_commit_message,
    confidence_level,
    get_version_bump_type,
    validate_commit_format,
)
from smart_commit.config.loader import ConfigError, load_config
from smart_commit.detection.detector import SmartCommitDetector
from smart_commit.detection.models import COMMIT_TYPE_DESCRIPTIONS, COMMIT_TYPES, Detection
from smart_commit.detection.rules import DEFAULT_RULES, RuleSet, ScoringWeights
from smart_commit.vcs.git_client import GitClient, GitError

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_NO_REPO = 3
EXIT_NO_CHANGES = 4
EXIT_CONFIG_ERROR = 5
EXIT_VCS_FAILURE = 6
EXIT_DECLINED = 8
EXIT_INVALID_MESSAGE = 9


# ---------------------------------------------------------------------------
# Progress and status display utilities
# ---------------------------------------------------------------------------

class ProgressIndicator:
    """Print a message on entry and the elapsed time on exit."""

    def __init__(self, message: str):
        self.message = message
        self.start_time = 0.0

    def __enter__(self):
        self.start_time = time.time()
        click.echo(f"→ {self.message}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            elapsed = time.time() - self.start_time
            click.echo(f"  ✓ Done ({elapsed:.1f}s)")
        return False


def print_step(step_num: int, total_steps: int, message: str):
    """Print a step indicator."""
    click.echo(f"\n{'='*60}")
    click.echo(f"Step {step_num}/{total_steps}: {message}")
    click.echo(f"{'='*60}")


def print_info(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}")


def print_success(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}")


def print_warning(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}")


def print_error(message: str, indent: int = 0):
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def build_detector(client: GitClient, config: Dict[str, Any]) -> SmartCommitDetector:
    """Create a detector using the rules and weights from ``config``."""
    rules: RuleSet = DEFAULT_RULES.extended(config["extra_patterns"], config["extra_keywords"])
    weights = ScoringWeights.from_mapping(config["weights"])
    return SmartCommitDetector(client, rules=rules, weights=weights)


def display_analysis(detection: Detection, description: str, proposed: str, level: str) -> None:
    """Show the detection results."""
    colour = {"high": "green", "medium": "yellow", "low": "red"}[level]
    print_info(f"Type: {click.style(detection.type, fg='cyan', bold=True)}", indent=1)
    print_info(f"Description: {description}", indent=1)
    print_info(
        f"Confidence: {click.style(f'{detection.confidence * 100:.1f}%', fg=colour)} ({level})",
        indent=1,
    )
    print_info(f"Reason: {detection.reason}", indent=1)
    print_info(f'Full message: "{proposed}"', indent=1)


def prompt_commit_type(detection: Detection) -> str:
    """Ask the user to pick a commit type, suggesting the detected one."""
    click.echo("")
    for commit_type in COMMIT_TYPES:
        marker = " (suggested)" if commit_type == detection.type else ""
        click.echo(f"   {commit_type:<9} {COMMIT_TYPE_DESCRIPTIONS[commit_type]}{marker}")
    return click.prompt(
        f"   Select type (detected {detection.type} at {detection.confidence * 100:.1f}%)",
        type=click.Choice(list(COMMIT_TYPES)),
        default=detection.type,
        show_choices=False,
    )


def prompt_interactive_message(
    detector: SmartCommitDetector,
    detection: Detection,
    min_description_length: int,
) -> str:
    """Collect type, scope, breaking flag, description and body."""
    commit_type = prompt_commit_type(detection)

    while True:
        scope = click.prompt("   Enter the scope (optional)", default="", show_default=False).strip()
        if not scope or SCOPE_RE.match(scope):
            break
        print_warning("Scope should be lowercase with hyphens", indent=1)

    breaking = click.confirm("   Is this a breaking change?", default=False)

    suggested = detector.generate_smart_description(commit_type)
    while True:
        description = click.prompt("   Enter the commit description", default=suggested).strip()
        if len(description) >= min_description_length:
            break
        print_warning(
            f"Description must be at least {min_description_length} characters", indent=1
        )

    body = click.prompt("   Enter the commit body (optional)", default="", show_default=False)
    return build_commit_message(commit_type, description, scope=scope, breaking=breaking, body=body)


def choose_message(
    detector: SmartCommitDetector,
    detection: Detection,
    proposed: str,
    level: str,
    config: Dict[str, Any],
) -> Optional[str]:
    """Let the user accept, adjust or decline the proposed message.

    Returns
    -------
    Optional[str]
        The final commit message, or ``None`` if the user declined.
    """
    message: Optional[str] = None
    if level == "high":
        click.echo("")
        if click.confirm(f"   Use smart suggestion: {proposed}?", default=True):
            message = proposed

    if message is None:
        message = prompt_interactive_message(
            detector, detection, config["commit"]["min_description_length"]
        )

    click.echo("")
    print_info(f"Commit message: {message.splitlines()[0]}")
    if click.confirm("   Proceed with this commit?", default=True):
        return message
    return None


def ensure_staged(client: GitClient) -> List[str]:
    """Return the staged files or exit when there are none."""
    try:
        staged = client.staged_files()
    except GitError as exc:
        print_error(f"VCS error: {exc}")
        raise click.exceptions.Exit(EXIT_VCS_FAILURE)
    if not staged:
        print_error("No staged files found!")
        print_info("Use: git add <files> (or --stage) before committing", indent=1)
        raise click.exceptions.Exit(EXIT_NO_CHANGES)
    return staged


@click.command()
@click.argument("message", required=False)
@click.option("--smart", is_flag=True, help="Commit the detected message without prompting.")
@click.option("--dry-run", is_flag=True, help="Only show the analysis; do not commit.")
@click.option("--stage", is_flag=True, help="Stage modified tracked files before analysing.")
@click.option("--no-verify", is_flag=True, help="Skip Git commit hooks.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="smartcommit")
def main(
    message: Optional[str],
    smart: bool,
    dry_run: bool,
    stage: bool,
    no_verify: bool,
    verbose: bool,
) -> None:
    """🧠 Smart Conventional Commit helper for Git repositories.

    Without MESSAGE, the staged changes are analysed and a commit type
    and description are proposed. With MESSAGE, it is validated as a
    Conventional Commit and committed as-is.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    total_steps = 4
    try:
        # Step 1: Detect repository
        print_step(1, total_steps, "Detecting Repository")
        repo_root = GitClient.find_repo_root(Path.cwd())
        if repo_root is None:
            print_error("No Git repository found in current directory or parent directories.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        print_success(f"Found Git repository at: {repo_root}")

        # Step 2: Load configuration
        print_step(2, total_steps, "Loading Configuration")
        try:
            config = load_config(repo_root)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
        print_success("Configuration loaded")

        client = GitClient(repo_root)
        if stage:
            try:
                with ProgressIndicator("Staging modified files"):
                    client.stage_files(client.modified_files())
            except GitError as exc:
                print_error(f"Failed to stage files: {exc}")
                raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        # Step 3: Determine the commit message
        print_step(3, total_steps, "Preparing Commit Message")
        if message:
            try:
                warnings = validate_commit_format(message, **config["commit"])
            except CommitMessageError as exc:
                print_error(str(exc))
                raise click.exceptions.Exit(EXIT_INVALID_MESSAGE)
            for warning in warnings:
                print_warning(warning)
            print_success("Commit format is valid")
            if dry_run:
                raise click.exceptions.Exit(EXIT_SUCCESS)
            ensure_staged(client)
            commit_message = message
        else:
            detector = build_detector(client, config)
            with ProgressIndicator("Analyzing changes"):
                detection = detector.detect_commit_type()
            description = detector.generate_smart_description(detection.type)
            proposed = f"{detection.type}: {description}"
            thresholds = config["thresholds"]
            level = confidence_level(
                detection.confidence,
                high=thresholds["high_confidence"],
                medium=thresholds["medium_confidence"],
            )
            display_analysis(detection, description, proposed, level)

            if dry_run:
                raise click.exceptions.Exit(EXIT_SUCCESS)

            ensure_staged(client)
            if smart:
                if level == "low":
                    print_warning("Low confidence - using detected type anyway")
                commit_message = proposed
            else:
                chosen = choose_message(detector, detection, proposed, level, config)
                if chosen is None:
                    print_warning("Commit cancelled")
                    raise click.exceptions.Exit(EXIT_DECLINED)
                commit_message = chosen

        # Step 4: Commit
        print_step(4, total_steps, "Committing")
        try:
            with ProgressIndicator("Creating commit"):
                client.commit(commit_message, no_verify=no_verify)
        except GitError as exc:
            print_error(f"Commit failed: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_success(f"Committed: {commit_message.splitlines()[0]}")
        print_info(f"Version bump type: {get_version_bump_type(commit_message)}", indent=1)
        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        raise
    except (click.exceptions.Abort, KeyboardInterrupt):
        print_warning("Aborted")
        raise click.exceptions.Exit(EXIT_DECLINED)
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)

"""Locating the agent source directory and preparing the destination."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from .config import AGENT_EXTENSION, AGENT_SUBDIR, REQUIRED_TOOLS
from .console import Console
from .exceptions import (
    DestinationError,
    MissingDependencyError,
    NoInstallableFilesError,
    SourceNotFoundError,
)
from .scanner import list_installable_files


def check_dependencies(
    required: Iterable[str] = REQUIRED_TOOLS,
    console: Optional[Console] = None,
) -> None:
    """Raise MissingDependencyError unless every required tool is on PATH."""
    console = console or Console()
    console.debug("Checking dependencies...")

    missing = [tool for tool in required if shutil.which(tool) is None]
    if missing:
        raise MissingDependencyError(
            f"Missing required dependencies: {' '.join(missing)}",
            hint="Please install missing dependencies and try again.",
        )

    console.debug("All dependencies found")


def find_repo_root(start: Optional[Path] = None, console: Optional[Console] = None) -> Path:
    """
    Return the enclosing git repository root.

    Falls back to ``start`` (or the current directory) when git cannot
    find a repository there.
    """
    console = console or Console()
    cwd = Path(start) if start is not None else Path.cwd()
    console.debug("Finding repository root...")

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        console.debug(f"Could not run git: {e}")
        result = None

    if result is not None and result.returncode == 0 and result.stdout.strip():
        root = Path(result.stdout.strip())
        console.debug(f"Found git repository root: {root}")
        return root

    console.debug(f"Not in git repository, using current directory: {cwd}")
    return cwd


def resolve_source_dir(repo_root: Path, console: Optional[Console] = None) -> Path:
    """Return ``<repo_root>/.opencode/agent`` after checking it has agent files."""
    console = console or Console()
    source_dir = Path(repo_root) / AGENT_SUBDIR

    if not source_dir.is_dir():
        raise SourceNotFoundError(
            f"Source directory not found: {source_dir}",
            hint="Make sure you're running this from the repository root "
                 f"or that {AGENT_SUBDIR.as_posix()}/ directory exists.",
        )

    agent_count = len(list_installable_files(source_dir))
    if agent_count == 0:
        raise NoInstallableFilesError(
            f"No agent files (*{AGENT_EXTENSION}) found in {source_dir}"
        )

    console.debug(f"Found {agent_count} agent files in source directory")
    return source_dir


def prepare_destination(dest_dir: Path, dry_run: bool, console: Optional[Console] = None) -> None:
    """Create the destination directory if needed and check it is writable."""
    console = console or Console()
    console.debug("Creating destination directory...")

    if dry_run:
        if not dest_dir.exists():
            console.info(f"DRY RUN: Would create directory {dest_dir}")
        return

    if not dest_dir.is_dir():
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationError(f"Failed to create directory: {dest_dir} ({e})") from e
        console.debug(f"Created directory: {dest_dir}")
    else:
        console.debug(f"Directory already exists: {dest_dir}")

    if not os.access(dest_dir, os.W_OK):
        raise DestinationError(f"No write permission to directory: {dest_dir}")

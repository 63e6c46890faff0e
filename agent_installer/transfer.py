"""Executing a Decision for one file."""

import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import BACKUP_TIMESTAMP_FORMAT
from .console import Console
from .models import Decision, FileEntry, Outcome, TransferError


def copy_file(src: Path, dst: Path) -> None:
    """Copy a file over dst, replacing any existing content."""
    shutil.copy2(src, dst)


def safe_copy_file(src: Path, dst: Path, filename: str) -> TransferError | None:
    """
    Copy a file safely, returning a TransferError if the copy fails.
    Returns None on success.
    """
    try:
        copy_file(src, dst)
        return None
    except (OSError, shutil.Error) as e:
        return TransferError(filename, str(src), str(dst), str(e))


def backup_path_for(dest_path: Path, now: Optional[datetime] = None) -> Path:
    """
    Return an unused ``<dest>.bak.<timestamp>`` path.

    A numeric suffix is appended when a backup with the same timestamp
    already exists.
    """
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    candidate = dest_path.with_name(f"{dest_path.name}.bak.{stamp}")
    counter = 1
    while candidate.exists():
        candidate = dest_path.with_name(f"{dest_path.name}.bak.{stamp}_{counter}")
        counter += 1
    return candidate


def backup_existing_file(dest_path: Path, filename: str) -> tuple[Path, TransferError | None]:
    """Copy dest_path to a timestamped backup next to it."""
    backup = backup_path_for(dest_path)
    return backup, safe_copy_file(dest_path, backup, filename)


def _dry_run(entry: FileEntry, decision: Decision, console: Console) -> Outcome:
    if decision is Decision.SKIP:
        console.info(f"Skipping: {entry.filename} (already exists)")
        return Outcome.SKIPPED
    if decision is Decision.BACKUP:
        console.info(f"DRY RUN: Would backup {entry.dest_path} to {backup_path_for(entry.dest_path)}")
        console.info(f"DRY RUN: Would backup and install {entry.filename}")
        return Outcome.INSTALLED
    if decision in (Decision.INSTALL, Decision.OVERWRITE):
        console.info(f"DRY RUN: Would {decision.value} {entry.filename}")
        return Outcome.INSTALLED
    raise ValueError(f"Cannot transfer with decision {decision!r}")


def apply_decision(
    entry: FileEntry,
    decision: Decision,
    dry_run: bool,
    console: Optional[Console] = None,
    errors: Optional[list[TransferError]] = None,
) -> Outcome:
    """
    Carry out decision for entry and return the resulting Outcome.

    Failures are reported on the console and appended to errors when a
    list is given. Nothing is written when dry_run is set.
    """
    console = console or Console()

    if dry_run:
        return _dry_run(entry, decision, console)

    if decision is Decision.SKIP:
        console.info(f"Skipping: {entry.filename} (already exists)")
        return Outcome.SKIPPED

    if decision is Decision.BACKUP:
        backup, error = backup_existing_file(entry.dest_path, entry.filename)
        if error:
            console.error(f"Failed to backup existing file: {entry.filename}")
            console.debug(f"  {error.error}")
            if errors is not None:
                errors.append(error)
            return Outcome.FAILED
        console.debug(f"Backed up to: {backup}")

        error = safe_copy_file(entry.source_path, entry.dest_path, entry.filename)
        if error:
            console.error(f"Failed to copy: {entry.filename}")
            if errors is not None:
                errors.append(error)
            return Outcome.FAILED
        console.success(f"Installed: {entry.filename} (existing file backed up)")
        return Outcome.INSTALLED

    if decision in (Decision.INSTALL, Decision.OVERWRITE):
        error = safe_copy_file(entry.source_path, entry.dest_path, entry.filename)
        if error:
            console.error(f"Failed to copy: {entry.filename}")
            if errors is not None:
                errors.append(error)
            return Outcome.FAILED
        if decision is Decision.OVERWRITE:
            console.success(f"Overwritten: {entry.filename}")
        else:
            console.success(f"Installed: {entry.filename}")
        return Outcome.INSTALLED

    raise ValueError(f"Cannot transfer with decision {decision!r}")

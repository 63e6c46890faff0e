"""Installation summary and post-install validation."""

from typing import Optional

from tqdm import tqdm

from .console import Console
from .models import FileEntry, Report


def print_summary(report: Report, console: Optional[Console] = None) -> None:
    """Print the installed/skipped/failed totals."""
    console = console or Console()
    console.echo()
    console.info("Installation Summary:")
    console.info(f"  Installed: {report.installed}")
    console.info(f"  Skipped: {report.skipped}")
    if report.failed:
        console.error(f"  Failed: {report.failed}")

    if report.errors:
        print(f"\n--- Transfer Errors ({len(report.errors)} files failed) ---", file=console.stderr)
        for error in report.errors[:10]:  # Show first 10
            print(f"  {error.filename}", file=console.stderr)
            print(f"    {error.error}", file=console.stderr)
        if len(report.errors) > 10:
            print(f"  ... and {len(report.errors) - 10} more errors", file=console.stderr)
        print("-" * 20, file=console.stderr)


def validate_installation(
    entries: list[FileEntry],
    dry_run: bool,
    console: Optional[Console] = None,
) -> list[str]:
    """
    Check that every source file now exists at its destination.

    Missing files are reported as warnings and returned; they never fail
    the run. Nothing is checked in dry-run mode.
    """
    console = console or Console()
    if dry_run:
        return []

    console.debug("Validating installation...")
    missing = []
    for entry in tqdm(entries, desc="Validating", unit="file",
                      disable=not console.verbose, leave=False):
        if not entry.dest_path.is_file():
            missing.append(entry.filename)

    if not missing:
        console.success("All agent files are present in destination directory")
    else:
        console.warning("Some files were not installed:")
        for filename in missing:
            console.warning(f"  - {filename}")
    return missing

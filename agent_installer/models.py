"""Data models for the agent installer."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class Decision(Enum):
    """What to do with a single source file."""
    INSTALL = "install"
    SKIP = "skip"
    OVERWRITE = "overwrite"
    BACKUP = "backup"
    QUIT = "quit"


class Outcome(Enum):
    """Result of transferring a single file."""
    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Mode:
    """Collision-handling flags for one run.

    Precedence when several are set: dry_run > force > skip_existing >
    backup > interactive > skip.
    """
    dry_run: bool = False
    force: bool = False
    skip_existing: bool = False
    backup: bool = False
    interactive: bool = True
    batch_mode: bool = False


@dataclass(frozen=True)
class FileEntry:
    """A source file and where it will be installed."""
    filename: str
    source_path: Path
    dest_path: Path

    @classmethod
    def for_file(cls, filename: str, source_dir: Path, dest_dir: Path) -> "FileEntry":
        return cls(filename, source_dir / filename, dest_dir / filename)


@dataclass(frozen=True)
class ScannedFile:
    """A FileEntry plus what the collision scan found at the destination."""
    entry: FileEntry
    collides: bool = False
    identical: bool = False

    @property
    def filename(self) -> str:
        return self.entry.filename


@dataclass
class BatchState:
    """The "apply to all" choice, set at most once per run."""
    choice: Optional[Decision] = None

    def remember(self, decision: Decision) -> None:
        if self.choice is None:
            self.choice = decision


@dataclass
class TransferError:
    """Record of a file that failed to install."""
    filename: str
    source_path: str
    dest_path: str
    error: str


@dataclass
class Report:
    """Per-run outcome counters."""
    installed: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[TransferError] = field(default_factory=list)

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.INSTALLED:
            self.installed += 1
        elif outcome is Outcome.SKIPPED:
            self.skipped += 1
        elif outcome is Outcome.FAILED:
            self.failed += 1
        else:
            raise ValueError(f"Unknown outcome: {outcome!r}")

    @property
    def total(self) -> int:
        return self.installed + self.skipped + self.failed


@dataclass
class RunResult:
    """What the run loop hands back to the CLI."""
    report: Report
    cancelled: bool = False
    missing: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.report.failed == 0

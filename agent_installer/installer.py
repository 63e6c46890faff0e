"""The install run loop."""

from dataclasses import dataclass, field
from pathlib import Path

from .console import Console
from .models import BatchState, Decision, Mode, Report, RunResult
from .policy import ConsolePrompter, Prompter, resolve
from .report import print_summary, validate_installation
from .scanner import collision_names, detect_collisions
from .transfer import apply_decision


@dataclass
class InstallContext:
    """Everything one run needs, passed explicitly to each step."""
    mode: Mode
    console: Console = field(default_factory=Console)
    prompter: Prompter = field(default_factory=ConsolePrompter)
    batch_state: BatchState = field(default_factory=BatchState)
    report: Report = field(default_factory=Report)


def warn_collisions(names: list[str], console: Console) -> None:
    """Print the pre-flight list of files that already exist."""
    if not names:
        console.debug("No file collisions detected")
        return
    console.warning(f"Found {len(names)} file collision(s):")
    for name in names:
        console.warning(f"  - {name}")
    console.echo()


def install_agents(source_dir: Path, dest_dir: Path, ctx: InstallContext) -> RunResult:
    """
    Install every agent file from source_dir into dest_dir.

    Files are processed one at a time in enumeration order. A Quit answer
    stops the run before any further file is touched and skips the summary.
    """
    console = ctx.console
    console.info("Installing OpenCode agents...")
    console.debug("Detecting file collisions...")

    scanned = detect_collisions(source_dir, dest_dir, show_progress=console.verbose)
    warn_collisions(collision_names(scanned), console)

    for item in scanned:
        entry = item.entry
        console.info(f"Processing: {entry.filename}")

        if item.collides:
            console.debug(f"File exists: {entry.dest_path}")
            if item.identical:
                console.debug("Installed file has identical contents")
            decision = resolve(entry, ctx.mode, ctx.batch_state, ctx.prompter, console)
        else:
            decision = Decision.INSTALL

        if decision is Decision.QUIT:
            console.info("Installation cancelled by user")
            return RunResult(report=ctx.report, cancelled=True)

        outcome = apply_decision(entry, decision, ctx.mode.dry_run, console, ctx.report.errors)
        ctx.report.record(outcome)

    print_summary(ctx.report, console)
    missing = validate_installation([item.entry for item in scanned], ctx.mode.dry_run, console)
    return RunResult(report=ctx.report, missing=missing)

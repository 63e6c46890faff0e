"""Collision resolution: turning a Mode and operator input into a Decision."""

import difflib
from pathlib import Path
from typing import Optional, Protocol

from .console import CYAN, YELLOW, Console
from .models import BatchState, Decision, FileEntry, Mode
from .scanner import files_identical

CHOICES = {
    "s": Decision.SKIP,
    "o": Decision.OVERWRITE,
    "b": Decision.BACKUP,
    "q": Decision.QUIT,
}
BATCH_CHOICES = {
    "s": Decision.SKIP,
    "o": Decision.OVERWRITE,
    "b": Decision.BACKUP,
}


class Prompter(Protocol):
    """Source of operator answers."""

    def ask(self, message: str) -> str: ...


class ConsolePrompter:
    """Reads answers from standard input."""

    def ask(self, message: str) -> str:
        try:
            return input(message)
        except EOFError:
            # No more input will ever arrive; treat it as quitting.
            print()
            return "q"


def _read_text(path: Path) -> list[str]:
    with open(path, encoding="utf-8", errors="replace") as f:
        return f.readlines()


def format_file_diff(dest_path: Path, source_path: Path) -> str:
    """Unified diff from the installed file (old) to the source file (new)."""
    diff = difflib.unified_diff(
        _read_text(dest_path),
        _read_text(source_path),
        fromfile=str(dest_path),
        tofile=str(source_path),
    )
    return "".join(diff)


def show_file_diff(entry: FileEntry, console: Console) -> None:
    """Print the differences between the installed and the new version."""
    console.echo()
    console.highlight(f"Showing differences for {entry.filename}:", CYAN)
    console.echo(f"Source: {entry.source_path}")
    console.echo(f"Destination: {entry.dest_path}")
    console.echo("---")
    try:
        if files_identical(entry.dest_path, entry.source_path):
            console.echo("Files are identical")
        else:
            console.echo(format_file_diff(entry.dest_path, entry.source_path).rstrip("\n"))
    except OSError as e:
        console.warning(f"Cannot show differences: {e}")
    console.echo("---")


def _prompt_batch_choice(prompter: Prompter, console: Console) -> Decision:
    console.echo("Please choose the action to apply to all files:")
    while True:
        choice = prompter.ask("Choice for all [s/o/b/q]: ").strip().lower()
        if choice == "q":
            return Decision.QUIT
        if choice in BATCH_CHOICES:
            return BATCH_CHOICES[choice]
        console.error("Invalid choice. Please enter s, o, b or q.")


def prompt_user_collision(
    entry: FileEntry,
    batch_mode: bool,
    batch_state: BatchState,
    prompter: Prompter,
    console: Console,
) -> Decision:
    """
    Ask the operator what to do with a colliding file.

    Diff requests and invalid answers re-prompt. In batch mode an
    "apply to all" answer is stored in batch_state.
    """
    options = "s/o/b/d/q/a" if batch_mode else "s/o/b/d/q"

    while True:
        console.highlight(f"File collision detected: {entry.filename}", YELLOW)
        console.echo("Choose an action:")
        console.echo("  s) Skip this file")
        console.echo("  o) Overwrite existing file")
        console.echo("  b) Backup existing file and install new one")
        console.echo("  d) Show diff")
        console.echo("  q) Quit installation")
        if batch_mode:
            console.echo("  a) Apply choice to all remaining files")

        choice = prompter.ask(f"Choice [{options}]: ").strip().lower()

        if choice in CHOICES:
            return CHOICES[choice]
        if choice == "d":
            show_file_diff(entry, console)
            continue
        if choice == "a" and batch_mode:
            decision = _prompt_batch_choice(prompter, console)
            if decision is not Decision.QUIT:
                batch_state.remember(decision)
            return decision

        console.error("Invalid choice. Please try again.")


def resolve(
    entry: FileEntry,
    mode: Mode,
    batch_state: BatchState,
    prompter: Prompter,
    console: Optional[Console] = None,
) -> Decision:
    """Decide what to do with a file that already exists at the destination."""
    console = console or Console()

    if mode.dry_run:
        console.debug("DRY_RUN mode: setting action to overwrite")
        return Decision.OVERWRITE
    if mode.force:
        console.debug("FORCE mode: setting action to overwrite")
        return Decision.OVERWRITE
    if mode.skip_existing:
        console.debug("SKIP_EXISTING mode: setting action to skip")
        return Decision.SKIP
    if mode.backup:
        console.debug("BACKUP mode: setting action to backup")
        return Decision.BACKUP
    if mode.interactive:
        if mode.batch_mode and batch_state.choice is not None:
            console.debug(f"Batch choice: {batch_state.choice.value}")
            return batch_state.choice
        console.debug("INTERACTIVE mode: prompting user")
        decision = prompt_user_collision(entry, mode.batch_mode, batch_state, prompter, console)
        console.debug(f"User choice: {decision.value}")
        return decision

    console.debug("Default: setting action to skip")
    return Decision.SKIP

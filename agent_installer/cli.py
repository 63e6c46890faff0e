"""Command-line interface for the agent installer."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn, Optional

from . import __version__
from .config import AGENT_SUBDIR, default_dest_dir
from .console import Console
from .exceptions import SetupError
from .installer import InstallContext, install_agents
from .models import Mode
from .paths import check_dependencies, find_repo_root, prepare_destination, resolve_source_dir


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        print("Use --help for usage information.", file=sys.stderr)
        sys.exit(1)


class _NonInteractiveFlag(argparse.Action):
    """Store True for the flag and turn interactive prompting off."""

    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, default=False, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(namespace, self.dest, True)
        namespace.interactive = False


class _InteractiveFlag(argparse.Action):
    """Turn interactive prompting on and batch mode off."""

    def __init__(self, option_strings, dest, **kwargs):
        super().__init__(option_strings, dest, nargs=0, default=True, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.interactive = True
        namespace.batch_mode = False


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = _ArgumentParser(
        description=f"Installs OpenCode agent configurations from {AGENT_SUBDIR.as_posix()}/ "
                    "to ~/.config/opencode/agent/",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                  # Interactive installation with prompts for conflicts
  %(prog)s --dry-run        # See what would be installed without making changes
  %(prog)s --force          # Overwrite all existing files
  %(prog)s --backup         # Backup existing files before installing
  %(prog)s --skip-existing  # Skip any files that already exist

Collision handling:
  When files already exist, you can choose to:
  - Skip: Keep existing file, don't install new one
  - Overwrite: Replace existing file with new one
  - Backup: Copy existing to a .bak file, then install new one
  - Quit: Exit the installation
        """
    )

    parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Show what would be done without executing"
    )
    parser.add_argument(
        "-f", "--force",
        action=_NonInteractiveFlag,
        help="Overwrite files without prompting"
    )
    parser.add_argument(
        "-b", "--backup",
        action="store_true",
        help="Always backup existing files"
    )
    parser.add_argument(
        "-s", "--skip-existing",
        action=_NonInteractiveFlag,
        help="Skip files that already exist"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "-i", "--interactive",
        action=_InteractiveFlag,
        help="Prompt for each collision (default)"
    )
    parser.add_argument(
        "--batch-mode",
        action="store_true",
        help="Offer to apply the same choice to all collisions"
    )
    parser.add_argument(
        "--repo-root",
        type=Path,
        default=None,
        help="Repository root holding .opencode/agent/ (default: discovered with git)"
    )
    parser.add_argument(
        "--dest-dir",
        type=Path,
        default=None,
        help="Install into this directory instead of ~/.config/opencode/agent/"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def build_mode(args: argparse.Namespace) -> Mode:
    """Map parsed flags onto an immutable Mode."""
    return Mode(
        dry_run=args.dry_run,
        force=args.force,
        skip_existing=args.skip_existing,
        backup=args.backup,
        interactive=args.interactive,
        batch_mode=args.batch_mode,
    )


def report_setup_error(error: SetupError, console: Console) -> None:
    """Print a fatal setup error and its remediation hint."""
    console.error(error.message)
    if error.hint:
        console.error(error.hint)


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    console = Console(verbose=args.verbose)
    mode = build_mode(args)

    console.highlight("OpenCode Agents Installation Script")
    console.echo("=" * 60)
    console.echo()

    if mode.dry_run:
        console.info("DRY RUN MODE: No files will be modified")
        console.echo()

    try:
        check_dependencies(console=console)
        repo_root = args.repo_root or find_repo_root(console=console)
        source_dir = resolve_source_dir(repo_root, console)
        dest_dir = args.dest_dir or default_dest_dir()
        prepare_destination(dest_dir, mode.dry_run, console)

        ctx = InstallContext(mode=mode, console=console)
        result = install_agents(source_dir, dest_dir, ctx)
    except SetupError as e:
        report_setup_error(e, console)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\nInstallation interrupted.", file=sys.stderr)
        sys.exit(1)

    if result.cancelled:
        sys.exit(0)
    if not result.success:
        sys.exit(1)

    console.echo()
    if not mode.dry_run:
        console.success("OpenCode agents installation completed!")
        console.info(f"Agents installed to: {dest_dir}")
        console.info("You can now use these agents in OpenCode.")
    else:
        console.info("DRY RUN completed. Run without --dry-run to perform actual installation.")

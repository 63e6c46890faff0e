"""Installer configuration constants."""

import os
from pathlib import Path

TOOL_NAME = "opencode"
AGENT_SUBDIR = Path(".opencode") / "agent"
AGENT_EXTENSION = ".md"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
REQUIRED_TOOLS = ("git",)


def default_dest_dir() -> Path:
    """Return the agent directory inside the user's config home."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / TOOL_NAME / "agent"

"""
OpenCode Agent Installer - A CLI tool to install agent configurations.

Features:
- Copies .opencode/agent/*.md into ~/.config/opencode/agent/
- Collision resolution via flags or CLI prompts
- Batch "apply to all" choices
- Timestamped backups of replaced files
- Dry-run previews that never touch the filesystem
"""

__version__ = "1.0.0"

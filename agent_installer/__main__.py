"""Allow running the installer with ``python -m agent_installer``."""

from .cli import main

if __name__ == "__main__":
    main()

"""Exception hierarchy for the agent installer."""

from typing import Optional


class InstallerError(Exception):
    """Base exception for the agent installer."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class SetupError(InstallerError):
    """Fatal error raised before any file is transferred."""
    pass


class MissingDependencyError(SetupError):
    pass


class SourceNotFoundError(SetupError):
    pass


class NoInstallableFilesError(SetupError):
    pass


class DestinationError(SetupError):
    pass

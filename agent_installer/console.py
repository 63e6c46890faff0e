"""Colored, tagged terminal output."""

import os
import sys
from typing import Optional, TextIO

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
CYAN = "\033[0;36m"
RESET = "\033[0m"


def _supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Console:
    """Prints tagged status lines; verbose lines only when enabled."""

    def __init__(
        self,
        verbose: bool = False,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        use_color: Optional[bool] = None,
    ):
        self.verbose = verbose
        self._stdout = stdout
        self._stderr = stderr
        self._use_color = use_color

    @property
    def stdout(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output.
        return self._stdout or sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr or sys.stderr

    def _paint(self, text: str, color: str, stream: TextIO) -> str:
        use_color = self._use_color if self._use_color is not None else _supports_color(stream)
        return f"{color}{text}{RESET}" if use_color else text

    def _emit(self, tag: str, color: str, message: str, stream: TextIO) -> None:
        print(f"{self._paint(tag, color, stream)} {message}", file=stream)

    def info(self, message: str) -> None:
        self._emit("[INFO]", BLUE, message, self.stdout)

    def success(self, message: str) -> None:
        self._emit("[SUCCESS]", GREEN, message, self.stdout)

    def warning(self, message: str) -> None:
        self._emit("[WARNING]", YELLOW, message, self.stdout)

    def error(self, message: str) -> None:
        self._emit("[ERROR]", RED, message, self.stderr)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._emit("[VERBOSE]", CYAN, message, self.stdout)

    def echo(self, message: str = "") -> None:
        print(message, file=self.stdout)

    def highlight(self, message: str, color: str = YELLOW) -> None:
        print(self._paint(message, color, self.stdout), file=self.stdout)

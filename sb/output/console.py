"""Console output abstraction.

Services report progress through ConsoleProtocol rather than printing.
Implementations:

- RichConsole: styled terminal output (rich)
- ActionsConsole: GitHub Actions workflow commands (``::error::`` etc.)
- MockConsole: captures output for tests
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import TextIO

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "ActionsConsole",
    "MockConsole",
    "OutputRecord",
    "console_for_env",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DEBUG = auto()
    DIM = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Diagnostic detail; hidden unless verbose/step-debug is on."""
        ...


class RichConsole:
    """Console implementation using Rich (writes to stderr)."""

    _STYLES = {
        Style.DEFAULT: "",
        Style.SUCCESS: "green",
        Style.ERROR: "red bold",
        Style.WARNING: "yellow",
        Style.INFO: "cyan",
        Style.DEBUG: "dim",
        Style.DIM: "dim",
    }

    def __init__(self, *, verbose: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=True, highlight=False)
        self._verbose = verbose

    def _labelled(self, label: str, style: Style, message: str) -> None:
        from rich.text import Text

        line = Text(label, style=self._STYLES[style])
        line.append(f" {message}", style="dim" if style is Style.DEBUG else "")
        self._console.print(line)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=self._STYLES[style] or None, markup=False)

    def success(self, message: str) -> None:
        self._labelled("OK", Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled("error:", Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled("warning:", Style.WARNING, message)

    def info(self, message: str) -> None:
        self._labelled("info:", Style.INFO, message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._labelled("debug:", Style.DEBUG, message)


def _escape_command(message: str) -> str:
    """Escape data for a workflow command (%, CR and LF)."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsConsole:
    """Console writing GitHub Actions workflow commands to stdout.

    Plain/info lines are printed as-is; errors, warnings and debug lines
    become ``::error::``, ``::warning::`` and ``::debug::`` annotations.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _write(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        match style:
            case Style.ERROR:
                self.error(message)
            case Style.WARNING:
                self.warning(message)
            case Style.DEBUG:
                self.debug(message)
            case _:
                self._write(message)

    def success(self, message: str) -> None:
        self._write(message)

    def error(self, message: str) -> None:
        self._write(f"::error::{_escape_command(message)}")

    def warning(self, message: str) -> None:
        self._write(f"::warning::{_escape_command(message)}")

    def info(self, message: str) -> None:
        self._write(message)

    def debug(self, message: str) -> None:
        self._write(f"::debug::{_escape_command(message)}")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.print(f"OK {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self.print(f"error: {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self.print(f"warning: {message}", Style.WARNING)

    def info(self, message: str) -> None:
        self.print(f"info: {message}", Style.INFO)

    def debug(self, message: str) -> None:
        self.print(f"debug: {message}", Style.DEBUG)

    # Test helpers

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]


def console_for_env(environ: Mapping[str, str], *, verbose: bool = False) -> ConsoleProtocol:
    """ActionsConsole inside a GitHub Actions job, RichConsole otherwise."""
    if environ.get("GITHUB_ACTIONS", "").lower() == "true":
        return ActionsConsole()
    return RichConsole(verbose=verbose)

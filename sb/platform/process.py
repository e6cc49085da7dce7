"""External program execution.

Only archivers are run this way (``7z`` for ``.dmg`` images); the result
carries enough of the program's output to explain a failed extraction.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from sb.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "which"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A program that could not start or exited non-zero.

    Attributes:
        command: Program and arguments as run.
        returncode: Exit status, -1 if the program never ran.
        stdout: Captured standard output.
        stderr: Captured standard error, or why the program never ran.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def program(self) -> str:
        return Path(self.command[0]).name if self.command else "<none>"

    def detail(self, max_lines: int = 5) -> str:
        """Last lines of stderr, falling back to stdout.

        7-Zip reports some archive errors on stdout only.
        """
        text = self.stderr.strip() or self.stdout.strip()
        return "\n".join(text.splitlines()[-max_lines:])

    def __str__(self) -> str:
        if self.returncode < 0:
            return f"{self.program} could not be run: {self.stderr}"
        return f"{self.program} exited with status {self.returncode}"


def which(name: str) -> Path | None:
    """Find an executable on PATH."""
    found = shutil.which(name)
    return Path(found) if found else None


def run(
    cmd: list[str],
    cwd: Path,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run cmd in cwd and return its stdout.

    Returns:
        Ok(stdout) on exit status 0, Err(ProcessError) otherwise.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(command, -1, stderr=f"timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(command, -1, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)

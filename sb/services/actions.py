"""GitHub Actions runner I/O.

Inputs arrive as ``INPUT_<NAME>`` environment variables. Outputs and PATH
additions are appended to the files named by ``GITHUB_OUTPUT`` and
``GITHUB_PATH``. Outside a runner those variables are unset and outputs
are printed instead.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from pathlib import Path

from sb.core.result import Err, Ok, Result
from sb.output.console import ConsoleProtocol
from sb.services.setup import SetupResult
from sb.services.setup_errors import MissingInput, OutputFailed

__all__ = [
    "INPUT_VERSION",
    "OUTPUT_PATH",
    "OUTPUT_VERSION",
    "add_path",
    "get_input",
    "input_env_name",
    "publish",
    "set_output",
]

INPUT_VERSION = "blender-version"
OUTPUT_VERSION = "blender-version"
OUTPUT_PATH = "blender-path"


def input_env_name(name: str) -> str:
    """Environment variable the runner uses for an input.

    >>> input_env_name("blender-version")
    'INPUT_BLENDER-VERSION'
    """
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(
    name: str,
    environ: Mapping[str, str],
    *,
    required: bool = False,
) -> Result[str, MissingInput]:
    value = environ.get(input_env_name(name), "").strip()
    if required and not value:
        return Err(MissingInput(name=name))
    return Ok(value)


def _append(path: Path, text: str) -> Result[None, OutputFailed]:
    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as e:
        return Err(OutputFailed(path=path, message=str(e)))
    return Ok(None)


def set_output(
    name: str,
    value: str,
    environ: Mapping[str, str],
    console: ConsoleProtocol,
) -> Result[None, OutputFailed]:
    """Publish a step output (heredoc form, safe for any value)."""
    output_file = environ.get("GITHUB_OUTPUT", "").strip()
    if not output_file:
        console.print(f"{name}={value}")
        return Ok(None)

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return _append(Path(output_file), f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def add_path(
    path: Path,
    environ: Mapping[str, str],
    console: ConsoleProtocol,
) -> Result[None, OutputFailed]:
    """Prepend a directory to PATH for subsequent steps."""
    path_file = environ.get("GITHUB_PATH", "").strip()
    if not path_file:
        console.debug(f"GITHUB_PATH not set; add {path} to PATH manually")
        return Ok(None)
    return _append(Path(path_file), f"{path}\n")


def publish(
    result: SetupResult,
    environ: Mapping[str, str],
    console: ConsoleProtocol,
) -> Result[None, OutputFailed]:
    """Publish version and path outputs and add the path to PATH."""
    for step in (
        lambda: add_path(result.path, environ, console),
        lambda: set_output(OUTPUT_VERSION, result.version, environ, console),
        lambda: set_output(OUTPUT_PATH, str(result.path), environ, console),
    ):
        outcome = step()
        if isinstance(outcome, Err):
            return outcome
    return Ok(None)

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer

from sb.core.config import Config, load_config_or_default
from sb.core.result import Err
from sb.output.console import ConsoleProtocol, console_for_env
from sb.output.errors import print_setup_error, setup_error_exit_code
from sb.platform.detection import PlatformTarget, detect_target
from sb.services.setup import SetupService
from sb.services.setup_errors import SetupError


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    environ: Mapping[str, str]


def build_context(config_path: Path | None = None, *, verbose: bool = False) -> CLIContext:
    environ = dict(os.environ)
    console = console_for_env(environ, verbose=verbose)

    config_result = load_config_or_default(config_path, environ)
    if isinstance(config_result, Err):
        fail(config_result.error, console)

    return CLIContext(config=config_result.value, console=console, environ=environ)


def build_service(ctx: CLIContext) -> SetupService:
    return SetupService(config=ctx.config, console=ctx.console)


def resolve_target(ctx: CLIContext, os_name: str | None, arch: str | None) -> PlatformTarget:
    result = detect_target(os_name, arch)
    if isinstance(result, Err):
        fail(result.error, ctx.console)
    return result.value


def fail(error: SetupError, console: ConsoleProtocol) -> NoReturn:
    """Report error and exit with its code (no traceback)."""
    print_setup_error(error, console)
    raise typer.Exit(code=setup_error_exit_code(error))

from __future__ import annotations

from pathlib import Path

import typer

from sb import __version__
from sb.cli.context import build_context, build_service, fail, resolve_target
from sb.core.result import Err
from sb.releases.errors import FetchFailed
from sb.releases.versions import filter_releases, sort_minor_versions, sort_releases
from sb.services.actions import INPUT_VERSION, get_input, publish

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Resolve, download and cache Blender releases.",
)

_OS_OPTION = typer.Option(None, "--os", help="Target OS: linux, macos or windows.")
_ARCH_OPTION = typer.Option(None, "--arch", help="Target architecture, e.g. x64 or arm64.")
_CONFIG_OPTION = typer.Option(None, "--config", help="Path to setup-blender.toml.")


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def resolve(
    specifier: str = typer.Argument(..., help='"latest", "X.Y" or "X.Y.Z".'),
    os_name: str | None = _OS_OPTION,
    arch: str | None = _ARCH_OPTION,
    config: Path | None = _CONFIG_OPTION,
) -> None:
    """Print the release filename a version specifier resolves to."""
    ctx = build_context(config)
    target = resolve_target(ctx, os_name, arch)

    result = build_service(ctx).resolve(specifier, target)
    if isinstance(result, Err):
        fail(result.error, ctx.console)
    typer.echo(result.value)


@app.command()
def versions(config: Path | None = _CONFIG_OPTION) -> None:
    """List published minor versions, newest first."""
    ctx = build_context(config)
    service = build_service(ctx)

    result = service.list_minor_versions()
    if isinstance(result, Err):
        fail(FetchFailed(result.error), ctx.console)
    for minor in sort_minor_versions(result.value):
        typer.echo(minor)


@app.command()
def releases(
    minor: str = typer.Argument(..., help='Minor version, e.g. "4.0".'),
    os_name: str | None = _OS_OPTION,
    arch: str | None = _ARCH_OPTION,
    config: Path | None = _CONFIG_OPTION,
) -> None:
    """List artifacts of one minor version, newest first.

    With --os or --arch, only that platform's artifacts are listed; the
    half not given is detected from the host.
    """
    ctx = build_context(config)
    result = build_service(ctx).list_releases(minor)
    if isinstance(result, Err):
        fail(FetchFailed(result.error), ctx.console)

    names = result.value
    if os_name is not None or arch is not None:
        target = resolve_target(ctx, os_name, arch)
        names = filter_releases(names, target.os, target.arch)
    for name in sort_releases(names):
        typer.echo(name)


@app.command()
def install(
    version: str | None = typer.Option(
        None,
        "--version",
        help=f'Version specifier. Defaults to the "{INPUT_VERSION}" action input.',
    ),
    os_name: str | None = _OS_OPTION,
    arch: str | None = _ARCH_OPTION,
    config: Path | None = _CONFIG_OPTION,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
) -> None:
    """Resolve, download, extract and cache Blender; publish step outputs."""
    ctx = build_context(config, verbose=verbose)

    specifier = version
    if not specifier:
        input_result = get_input(INPUT_VERSION, ctx.environ, required=True)
        if isinstance(input_result, Err):
            fail(input_result.error, ctx.console)
        specifier = input_result.value

    target = resolve_target(ctx, os_name, arch)

    result = build_service(ctx).setup(specifier, target)
    if isinstance(result, Err):
        fail(result.error, ctx.console)

    published = publish(result.value, ctx.environ, ctx.console)
    if isinstance(published, Err):
        fail(published.error, ctx.console)


def main() -> None:
    app()

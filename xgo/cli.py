"""Thin CLI wrapper for xgo.

This module provides the command-line interface using Typer. Flags keep
the Go style single dash spelling (``-targets=linux/amd64``) with double
dash aliases. As with Go's flag package, flags must precede the import
path and booleans accept ``-race=true``. All business logic is delegated
to xgo.builds.service.
"""

import logging
from typing import Annotated

import click
import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperCommand

from xgo import __version__
from xgo.builds.service import cross_compile
from xgo.config import get_settings
from xgo.log import configure_logging
from xgo.types import BuildRequest, XgoError, parse_targets

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="xgo",
    help="Go CGO cross compiler - build a Go package for many platforms in docker",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


# Boolean spellings accepted by Go's strconv.ParseBool.
_GO_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_GO_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def normalize_bool_flags(args: list[str], flag_opts: set[str]) -> list[str]:
    """Rewrite Go style ``-flag=true``/``-flag=false`` into plain flags.

    A true value keeps the bare flag, a false value drops it. Anything
    else is left untouched so click reports it. Arguments after ``--``
    are never rewritten.
    """
    result: list[str] = []
    for i, arg in enumerate(args):
        if arg == "--":
            result.extend(args[i:])
            break
        name, sep, value = arg.partition("=")
        if sep and name in flag_opts:
            if value in _GO_TRUE:
                result.append(name)
                continue
            if value in _GO_FALSE:
                continue
        result.append(arg)
    return result


class GoFlagCommand(TyperCommand):
    """Command accepting Go style boolean values on flag options."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        flag_opts = {
            opt
            for param in self.params
            if isinstance(param, click.Option) and param.is_flag and not param.count
            for opt in param.opts
        }
        return super().parse_args(ctx, normalize_bool_flags(args, flag_opts))


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"xgo version {__version__}")
        raise typer.Exit()


@app.command(
    cls=GoFlagCommand,
    context_settings={"allow_interspersed_args": False},
)
def main(
    import_path: Annotated[
        str,
        typer.Argument(
            metavar="IMPORT_PATH",
            help="Go import path, or a local package directory (absolute or ./relative)",
        ),
    ],
    go_version: Annotated[
        str,
        typer.Option("-go", "--go", help="Go release to use for cross compilation"),
    ] = "latest",
    package: Annotated[
        str,
        typer.Option("-pkg", "--pkg", help="Sub-package to build if not root import"),
    ] = "",
    out_prefix: Annotated[
        str,
        typer.Option(
            "-out", "--out", help="Prefix to use for output naming (empty = package name)"
        ),
    ] = "",
    remote: Annotated[
        str,
        typer.Option("-remote", "--remote", help="Version control remote repository to build"),
    ] = "",
    branch: Annotated[
        str,
        typer.Option("-branch", "--branch", help="Version control branch to build"),
    ] = "",
    deps: Annotated[
        str,
        typer.Option("-deps", "--deps", help="CGO dependencies (configure/make based archives)"),
    ] = "",
    targets: Annotated[
        str,
        typer.Option("-targets", "--targets", help="Comma separated targets to build for"),
    ] = "*/*",
    image: Annotated[
        str,
        typer.Option(
            "-image",
            "--image",
            help="Use custom docker image instead of official distribution",
        ),
    ] = "",
    verbose: Annotated[
        bool,
        typer.Option(
            "-v", "--verbose", help="Print the names of packages as they are compiled"
        ),
    ] = False,
    steps: Annotated[
        bool,
        typer.Option("-x", "--steps", help="Print the command as executing the builds"),
    ] = False,
    race: Annotated[
        bool,
        typer.Option(
            "-race", "--race", help="Enable data race detection (supported only on amd64)"
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Cross compile a Go package with CGO dependencies into the current directory."""
    if not import_path.strip():
        raise typer.BadParameter("import path must not be empty", param_hint="IMPORT_PATH")

    settings = get_settings()
    configure_logging(settings.log_level)

    request = BuildRequest(
        import_path=import_path,
        go_version=go_version,
        package=package,
        out_prefix=out_prefix,
        remote=remote,
        branch=branch,
        deps=deps,
        targets=parse_targets(targets),
        image=image or None,
        verbose=verbose,
        steps=steps,
        race=race,
    )

    try:
        cross_compile(request, settings, console=console)
    except XgoError as e:
        logger.debug("Aborting with %s (exit %d)", e.code, e.exit_code)
        err_console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(code=e.exit_code) from None


if __name__ == "__main__":
    app()

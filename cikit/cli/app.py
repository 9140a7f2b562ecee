from __future__ import annotations

import os
from pathlib import Path

import typer

from cikit import __version__
from cikit.cli.commands.plan_cmd import plan
from cikit.cli.commands.publish_cmd import publish_all
from cikit.cli.commands.run_cmd import run
from cikit.cli.context import ROOT_ENV_VAR
from cikit.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(run)
app.command()(plan)
app.command("publish-all")(publish_all)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Repository root holding the manifest (defaults to the current directory)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if root is not None:
        resolved = root.expanduser().resolve()
        if not resolved.is_dir():
            typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.FAILURE))
        os.environ[ROOT_ENV_VAR] = str(resolved)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def main() -> None:
    app()

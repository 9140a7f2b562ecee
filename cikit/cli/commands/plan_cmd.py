from __future__ import annotations

import typer

from cikit.cli.commands._helpers import unwrap_or_exit
from cikit.cli.context import build_context
from cikit.services.pipeline import Pipeline


def plan() -> None:
    """Show the version, release tag and dry-run decision."""
    ctx = build_context()
    pipeline = Pipeline(root=ctx.root, config=ctx.config, env=ctx.env, console=ctx.console)

    release = unwrap_or_exit(pipeline.plan(), ctx)
    typer.echo(f"version: {release.version}")
    typer.echo(f"tag: {release.tag}")
    if release.dry_run.enabled:
        typer.echo(f"dry_run: true ({release.dry_run.reason})")
    else:
        typer.echo("dry_run: false")
